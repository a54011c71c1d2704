"""SQLModel implementation of the purchase order repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models import PurchaseOrder, PurchaseOrderItem, Vendor
from .records import SQLModelRecordRepository

logger = get_logger(__name__)


class SQLModelPurchaseOrderRepository(SQLModelRecordRepository[PurchaseOrder]):
    """Purchase orders always load with their line items."""

    def __init__(self, session_factory, **kwargs) -> None:
        kwargs.setdefault("resource", "purchase-orders")
        kwargs.setdefault("order_by", "order_date")
        kwargs.setdefault("descending", True)
        super().__init__(PurchaseOrder, session_factory, **kwargs)

    def _select(self):
        return select(PurchaseOrder).options(selectinload(PurchaseOrder.items))  # type: ignore[arg-type]

    def _load_related(self, record: PurchaseOrder) -> None:
        list(record.items)

    def list_items(self, order_id: int, *, user_id: int) -> Optional[list[PurchaseOrderItem]]:
        order = self.get_by_id(order_id, user_id=user_id)
        if order is None:
            return None
        return list(order.items)

    def add_item(
        self, order_id: int, item: PurchaseOrderItem, *, user_id: int
    ) -> Optional[PurchaseOrderItem]:
        with self.session_factory() as session:
            order = self._fetch(session, order_id, user_id)
            if order is None:
                return None
            item.user_id = user_id
            item.order_id = order_id
            order.touch()
            session.add(item)
            session.add(order)
            session.commit()
            session.refresh(item)
        logger.info(
            "Purchase order item added",
            extra={"order_id": order_id, "item_id": item.id, "user_id": user_id},
        )
        self._publish("updated", user_id, order_id)
        return item

    def delete_item(self, order_id: int, item_id: int, *, user_id: int) -> bool:
        with self.session_factory() as session:
            item = session.exec(
                select(PurchaseOrderItem).where(
                    PurchaseOrderItem.id == item_id,
                    PurchaseOrderItem.order_id == order_id,
                    PurchaseOrderItem.user_id == user_id,
                )
            ).first()
            if item is None:
                return False
            session.delete(item)
        logger.info(
            "Purchase order item deleted",
            extra={"order_id": order_id, "item_id": item_id, "user_id": user_id},
        )
        self._publish("updated", user_id, order_id)
        return True


class SQLModelVendorRepository(SQLModelRecordRepository[Vendor]):
    """Deleting a vendor keeps its orders; they retain the vendor name only."""

    def __init__(self, session_factory, **kwargs) -> None:
        kwargs.setdefault("resource", "vendors")
        kwargs.setdefault("order_by", "company_name")
        super().__init__(Vendor, session_factory, **kwargs)

    def _before_delete(self, session: Session, record: Vendor) -> None:
        orders = session.exec(
            select(PurchaseOrder).where(
                PurchaseOrder.vendor_id == record.id, PurchaseOrder.user_id == record.user_id
            )
        ).all()
        for order in orders:
            order.vendor_id = None
            session.add(order)
        session.flush()
