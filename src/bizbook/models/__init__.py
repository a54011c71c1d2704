"""SQLModel table exports."""

from .asset import Asset
from .budget import Budget
from .credit_card import CreditCard
from .expense import Expense
from .income import Income
from .investment import Investment
from .liability import Liability
from .loan import Loan
from .payment import Payment
from .purchase_order import PurchaseOrder, PurchaseOrderItem
from .savings_goal import SavingsGoal
from .snapshot import NetWorthSnapshot
from .user import User
from .vendor import Vendor

__all__ = [
    "Asset",
    "Budget",
    "CreditCard",
    "Expense",
    "Income",
    "Investment",
    "Liability",
    "Loan",
    "NetWorthSnapshot",
    "Payment",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "SavingsGoal",
    "User",
    "Vendor",
]
