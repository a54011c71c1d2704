"""Debt and liability entities."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Liability(OwnedRecord, table=True):
    """Debt tracked on the balance sheet outside cards and loans."""

    __tablename__: ClassVar[str] = "liability"

    name: str = Field(nullable=False, max_length=120, index=True)
    liability_type: str = Field(default="consumer_debt", max_length=32, index=True)
    current_balance: float = Field(default=0.0, nullable=False)
    original_amount: Optional[float] = Field(default=None)
    interest_rate: float = Field(default=0.0, nullable=False)
    minimum_payment: float = Field(default=0.0, nullable=False)
    due_date: Optional[int] = Field(default=None, ge=1, le=31)
    payment_frequency: str = Field(default="monthly", max_length=16)
    payoff_strategy: str = Field(default="snowball", max_length=32)
