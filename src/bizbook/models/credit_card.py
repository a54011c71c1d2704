"""Credit card accounts."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class CreditCard(OwnedRecord, table=True):
    """Revolving credit line with a monthly due day."""

    __tablename__: ClassVar[str] = "credit_card"

    name: str = Field(nullable=False, max_length=120, index=True)
    last_four: Optional[str] = Field(default=None, max_length=4)
    balance: float = Field(default=0.0, nullable=False)
    credit_limit: float = Field(default=0.0, nullable=False)
    interest_rate: float = Field(default=0.0, nullable=False)
    minimum_payment: float = Field(default=0.0, nullable=False)
    due_date: Optional[int] = Field(default=None, ge=1, le=31)
    is_active: bool = Field(default=True, nullable=False)
    is_business: bool = Field(default=False, nullable=False)
