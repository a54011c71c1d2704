"""Savings goals."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class SavingsGoal(OwnedRecord, table=True):
    __tablename__: ClassVar[str] = "savings_goal"

    name: str = Field(nullable=False, max_length=120)
    target_amount: float = Field(default=0.0, nullable=False)
    current_amount: float = Field(default=0.0, nullable=False)
    monthly_contribution: float = Field(default=0.0, nullable=False)
    target_date: Optional[date] = Field(default=None)
    priority: str = Field(default="medium", max_length=16)
