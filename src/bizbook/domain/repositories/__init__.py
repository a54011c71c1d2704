"""Repository protocol definitions for domain layer."""

from .records import RecordRepository
from .specialized import (
    ExpenseRepository,
    PaymentRepository,
    PurchaseOrderRepository,
    SnapshotRepository,
    UserRepository,
)

__all__ = [
    "ExpenseRepository",
    "PaymentRepository",
    "PurchaseOrderRepository",
    "RecordRepository",
    "SnapshotRepository",
    "UserRepository",
]
