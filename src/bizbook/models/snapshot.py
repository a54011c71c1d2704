"""Point-in-time net worth snapshots."""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from sqlmodel import Field

from .base import OwnedRecord


class NetWorthSnapshot(OwnedRecord, table=True):
    __tablename__: ClassVar[str] = "net_worth_snapshot"

    snapshot_date: date = Field(nullable=False, index=True)
    total_assets: float = Field(default=0.0, nullable=False)
    total_liabilities: float = Field(default=0.0, nullable=False)
    net_worth: float = Field(default=0.0, nullable=False)
    liquid_assets: float = Field(default=0.0, nullable=False)
