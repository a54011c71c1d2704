"""Payments made against cards, loans and liabilities."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Payment(OwnedRecord, table=True):
    """Scheduled or completed payment toward one debt account."""

    __tablename__: ClassVar[str] = "payment"

    account_id: int = Field(nullable=False, index=True)
    account_type: str = Field(nullable=False, max_length=16, index=True)
    amount: float = Field(default=0.0, nullable=False)
    payment_date: date = Field(nullable=False)
    payment_method: Optional[str] = Field(default=None, max_length=32)
    confirmation_number: Optional[str] = Field(default=None, max_length=64)
    status: str = Field(default="pending", max_length=16, index=True)
    paid_at: Optional[datetime] = Field(default=None)
    notes: Optional[str] = Field(default=None, max_length=500)
