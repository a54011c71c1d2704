"""Business purchase orders and their line items."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship

from .base import OwnedRecord


class PurchaseOrder(OwnedRecord, table=True):
    """Order placed with a vendor; its total is derived from the items."""

    __tablename__: ClassVar[str] = "purchase_order"

    vendor_id: Optional[int] = Field(default=None, foreign_key="vendor.id", index=True)
    vendor: str = Field(nullable=False, max_length=255, index=True)
    order_number: Optional[str] = Field(default=None, max_length=64)
    status: str = Field(default="draft", max_length=16, index=True)
    order_date: date = Field(nullable=False)
    notes: Optional[str] = Field(default=None, max_length=500)

    items: list["PurchaseOrderItem"] = Relationship(
        back_populates="order",
        sa_relationship=relationship(
            "PurchaseOrderItem",
            back_populates="order",
            cascade="all, delete-orphan",
            order_by="PurchaseOrderItem.id",
        ),
    )


class PurchaseOrderItem(OwnedRecord, table=True):
    __tablename__: ClassVar[str] = "purchase_order_item"

    order_id: int = Field(foreign_key="purchase_order.id", nullable=False, index=True)
    description: str = Field(nullable=False, max_length=255)
    quantity: float = Field(default=1.0, nullable=False)
    unit_price: float = Field(default=0.0, nullable=False)

    order: Optional[PurchaseOrder] = Relationship(
        back_populates="items",
        sa_relationship=relationship("PurchaseOrder", back_populates="items"),
    )
