"""SQLModel implementation of the payment repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models import Payment
from ...models.base import utcnow
from .records import SQLModelRecordRepository


class SQLModelPaymentRepository(SQLModelRecordRepository[Payment]):
    def __init__(self, session_factory, **kwargs) -> None:
        kwargs.setdefault("resource", "payments")
        kwargs.setdefault("order_by", "payment_date")
        kwargs.setdefault("descending", True)
        super().__init__(Payment, session_factory, **kwargs)

    def list_for_account(
        self,
        *,
        user_id: int,
        account_id: Optional[int] = None,
        account_type: Optional[str] = None,
    ) -> list[Payment]:
        """Payments filtered by the debt account they target."""
        with self.session_factory() as session:
            statement = select(Payment).where(Payment.user_id == user_id)
            if account_id is not None:
                statement = statement.where(Payment.account_id == account_id)
            if account_type is not None:
                statement = statement.where(Payment.account_type == account_type)
            return list(session.exec(self._ordered(statement)).all())

    def mark_paid(
        self, payment_id: int, *, user_id: int, paid_at: Optional[datetime] = None
    ) -> Optional[Payment]:
        """Set status to ``paid`` and stamp ``paid_at``; idempotent for paid rows."""
        return self.update(
            payment_id,
            {"status": "paid", "paid_at": paid_at or utcnow()},
            user_id=user_id,
        )
