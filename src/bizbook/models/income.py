"""Income sources."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Income(OwnedRecord, table=True):
    __tablename__: ClassVar[str] = "income"

    source: str = Field(nullable=False, max_length=120, index=True)
    income_type: str = Field(default="salary", max_length=32)
    amount: float = Field(default=0.0, nullable=False)
    frequency: str = Field(default="monthly", max_length=16)
    next_pay_date: Optional[date] = Field(default=None)
    taxable: bool = Field(default=True, nullable=False)
    is_active: bool = Field(default=True, nullable=False)
