"""Owned assets."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Asset(OwnedRecord, table=True):
    """Asset valued at ``current_value`` scaled by ``ownership_percentage``."""

    __tablename__: ClassVar[str] = "asset"

    name: str = Field(nullable=False, max_length=120, index=True)
    asset_type: str = Field(default="cash_liquid", max_length=32, index=True)
    current_value: float = Field(default=0.0, nullable=False)
    purchase_price: Optional[float] = Field(default=None)
    is_liquid: bool = Field(default=False, nullable=False)
    appreciation_rate: Optional[float] = Field(default=None)
    depreciation_rate: Optional[float] = Field(default=None)
    ownership_percentage: float = Field(default=100.0, nullable=False)
