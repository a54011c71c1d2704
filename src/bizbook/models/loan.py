"""Installment loans."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Loan(OwnedRecord, table=True):
    """Personal, auto, student, mortgage or business loan."""

    __tablename__: ClassVar[str] = "loan"

    name: str = Field(nullable=False, max_length=120, index=True)
    loan_type: str = Field(default="personal", max_length=32)
    lender: Optional[str] = Field(default=None, max_length=120)
    balance: float = Field(default=0.0, nullable=False)
    original_amount: Optional[float] = Field(default=None)
    interest_rate: float = Field(default=0.0, nullable=False)
    monthly_payment: float = Field(default=0.0, nullable=False)
    term_months: Optional[int] = Field(default=None)
    due_date: Optional[int] = Field(default=None, ge=1, le=31)
    is_active: bool = Field(default=True, nullable=False)
    is_business: bool = Field(default=False, nullable=False)
