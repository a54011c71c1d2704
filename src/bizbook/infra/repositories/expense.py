"""Expense and income repositories."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Session, select

from ...models import Expense, Income
from .records import SQLModelRecordRepository


class SQLModelExpenseRepository(SQLModelRecordRepository[Expense]):
    def __init__(self, session_factory, **kwargs) -> None:
        kwargs.setdefault("resource", "expenses")
        kwargs.setdefault("order_by", "expense_date")
        kwargs.setdefault("descending", True)
        super().__init__(Expense, session_factory, **kwargs)

    def list_between(
        self, start: Optional[date], end: Optional[date], *, user_id: int
    ) -> list[Expense]:
        """Expenses dated within the inclusive range; either end may be open."""
        with self.session_factory() as session:
            statement = select(Expense).where(Expense.user_id == user_id)
            if start is not None:
                statement = statement.where(Expense.expense_date >= start)
            if end is not None:
                statement = statement.where(Expense.expense_date <= end)
            return list(session.exec(self._ordered(statement)).all())


class SQLModelIncomeRepository(SQLModelRecordRepository[Income]):
    def __init__(self, session_factory, **kwargs) -> None:
        kwargs.setdefault("resource", "income")
        super().__init__(Income, session_factory, **kwargs)

    def _before_delete(self, session: Session, record: Income) -> None:
        linked = session.exec(
            select(Expense).where(Expense.income_id == record.id, Expense.user_id == record.user_id)
        ).all()
        for expense in linked:
            expense.income_id = None
            session.add(expense)
        session.flush()
