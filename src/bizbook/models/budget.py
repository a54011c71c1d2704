"""Monthly category budgets."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field

from .base import OwnedRecord


class Budget(OwnedRecord, table=True):
    """Allocation for one category in one ``YYYY-MM`` month."""

    __tablename__: ClassVar[str] = "budget"

    category: str = Field(nullable=False, max_length=64, index=True)
    monthly_allocation: float = Field(default=0.0, nullable=False)
    alert_threshold: float = Field(default=80.0, nullable=False)
    budget_month: str = Field(nullable=False, max_length=7, index=True)
    is_active: bool = Field(default=True, nullable=False)
