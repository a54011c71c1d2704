"""Expense records."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Expense(OwnedRecord, table=True):
    """One-off or recurring spend, optionally linked to the income that paid it."""

    __tablename__: ClassVar[str] = "expense"

    description: str = Field(nullable=False, max_length=255)
    amount: float = Field(default=0.0, nullable=False)
    category: str = Field(nullable=False, max_length=64, index=True)
    expense_date: date = Field(nullable=False, index=True)
    payment_method: Optional[str] = Field(default=None, max_length=32)
    merchant: Optional[str] = Field(default=None, max_length=120)
    is_recurring: bool = Field(default=False, nullable=False)
    frequency: Optional[str] = Field(default=None, max_length=16)
    tax_deductible: bool = Field(default=False, nullable=False)
    income_id: Optional[int] = Field(default=None, foreign_key="income.id")
    is_business: bool = Field(default=False, nullable=False)
