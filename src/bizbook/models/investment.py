"""Investment accounts."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Investment(OwnedRecord, table=True):
    """Brokerage or retirement account with a recurring contribution."""

    __tablename__: ClassVar[str] = "investment"

    account_name: str = Field(nullable=False, max_length=120)
    account_type: str = Field(default="brokerage", max_length=32)
    institution: Optional[str] = Field(default=None, max_length=120)
    balance: float = Field(default=0.0, nullable=False)
    contribution_amount: float = Field(default=0.0, nullable=False)
    contribution_frequency: str = Field(default="monthly", max_length=16)
    expected_return: float = Field(default=0.0, nullable=False)
    risk_level: str = Field(default="moderate", max_length=16)
