"""Suppliers that purchase orders are placed with."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field

from .base import OwnedRecord


class Vendor(OwnedRecord, table=True):
    __tablename__: ClassVar[str] = "vendor"

    company_name: str = Field(nullable=False, max_length=255, index=True)
    contact_person: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=500)
    vendor_type: Optional[str] = Field(default=None, max_length=100)
    payment_terms: Optional[str] = Field(default=None, max_length=100)
    tax_id: Optional[str] = Field(default=None, max_length=20)
    is_active: bool = Field(default=True, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=500)
