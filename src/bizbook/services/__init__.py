"""Service module exports."""

from . import (
    auth,
    budgeting,
    credit,
    debts,
    due_dates,
    events,
    investments,
    money,
    net_worth,
    purchase_orders,
    summary,
)

__all__ = [
    "auth",
    "budgeting",
    "credit",
    "debts",
    "due_dates",
    "events",
    "investments",
    "money",
    "net_worth",
    "purchase_orders",
    "summary",
]
