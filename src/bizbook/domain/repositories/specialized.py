"""Repository protocols with resource-specific queries."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Protocol

from ...models import (
    Expense,
    NetWorthSnapshot,
    Payment,
    PurchaseOrder,
    PurchaseOrderItem,
    User,
)
from .records import RecordRepository


class ExpenseRepository(RecordRepository[Expense], Protocol):
    def list_between(
        self, start: Optional[date], end: Optional[date], *, user_id: int
    ) -> list[Expense]:
        """Expenses dated within the inclusive range; open ends allowed."""
        ...


class PaymentRepository(RecordRepository[Payment], Protocol):
    def list_for_account(
        self,
        *,
        user_id: int,
        account_id: Optional[int] = None,
        account_type: Optional[str] = None,
    ) -> list[Payment]:
        """Payments filtered by the debt account they target."""
        ...

    def mark_paid(
        self, payment_id: int, *, user_id: int, paid_at: Optional[datetime] = None
    ) -> Optional[Payment]:
        """Set status to paid and stamp ``paid_at``."""
        ...


class PurchaseOrderRepository(RecordRepository[PurchaseOrder], Protocol):
    def list_items(self, order_id: int, *, user_id: int) -> Optional[list[PurchaseOrderItem]]:
        """Items of an order; ``None`` when the order does not exist."""
        ...

    def add_item(
        self, order_id: int, item: PurchaseOrderItem, *, user_id: int
    ) -> Optional[PurchaseOrderItem]:
        """Attach *item* to the order; ``None`` when the order does not exist."""
        ...

    def delete_item(self, order_id: int, item_id: int, *, user_id: int) -> bool:
        """Remove one line item."""
        ...


class SnapshotRepository(RecordRepository[NetWorthSnapshot], Protocol):
    def latest(self, *, user_id: int) -> Optional[NetWorthSnapshot]:
        """Most recent snapshot by date."""
        ...


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve a user by ID."""
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve a user by username."""
        ...

    def create(self, user: User) -> User:
        """Persist a new user."""
        ...

    def update(self, user_id: int, changes: Mapping[str, Any]) -> Optional[User]:
        """Apply field changes to a user."""
        ...
