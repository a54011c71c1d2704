"""Budgeting and savings-goal domain services."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from .due_dates import month_key
from .money import HUNDRED, ZERO, amount_of, field_value, percent, quantize_cents, to_amount

DEFAULT_ALERT_THRESHOLD = Decimal("80")


@dataclass(slots=True)
class BudgetProgress:
    """Spend against one budget line for its month."""

    category: str
    budget_month: str | None
    allocation: Decimal
    spent: Decimal
    progress: Decimal
    over_threshold: bool
    budget_id: Any = None

    @property
    def remaining(self) -> Decimal:
        return self.allocation - self.spent

    def to_dict(self) -> dict[str, Any]:
        return {
            "budget_id": self.budget_id,
            "category": self.category,
            "budget_month": self.budget_month,
            "allocation": self.allocation,
            "spent": self.spent,
            "remaining": self.remaining,
            "progress": self.progress,
            "over_threshold": self.over_threshold,
        }


def spent_for_budget(budget: Any, expenses: Iterable[Any]) -> Decimal:
    """Sum expenses in the budget's category (case-insensitive) and month."""

    category = str(field_value(budget, "category", default="")).strip().lower()
    month = field_value(budget, "budget_month", "budgetMonth")
    total = ZERO
    for expense in expenses:
        expense_category = str(field_value(expense, "category", default="")).strip().lower()
        if expense_category != category:
            continue
        if month is not None and month_key(field_value(expense, "expense_date", "expenseDate")) != month:
            continue
        total += amount_of(expense, "amount")
    return quantize_cents(total)


def budget_progress(budget: Any, spent: Any) -> BudgetProgress:
    """Capped progress for display plus the uncapped over-threshold flag.

    A zero allocation yields zero progress and never trips the alert.
    """

    allocation = amount_of(budget, "monthly_allocation", "monthlyAllocation", "budget_amount")
    threshold = DEFAULT_ALERT_THRESHOLD
    if field_value(budget, "alert_threshold", "alertThreshold") is not None:
        threshold = amount_of(budget, "alert_threshold", "alertThreshold")
    spent_amount = to_amount(spent)

    ratio = percent(spent_amount, allocation)
    return BudgetProgress(
        budget_id=field_value(budget, "id"),
        category=str(field_value(budget, "category", default="")),
        budget_month=field_value(budget, "budget_month", "budgetMonth"),
        allocation=quantize_cents(allocation),
        spent=quantize_cents(spent_amount),
        progress=quantize_cents(min(ratio, HUNDRED)),
        over_threshold=allocation > 0 and ratio > threshold,
    )


@dataclass(slots=True)
class BudgetOverview:
    month: str
    lines: list[BudgetProgress]

    @property
    def total_allocated(self) -> Decimal:
        return sum((line.allocation for line in self.lines), ZERO)

    @property
    def total_spent(self) -> Decimal:
        return sum((line.spent for line in self.lines), ZERO)

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "total_allocated": self.total_allocated,
            "total_spent": self.total_spent,
            "total_remaining": self.total_allocated - self.total_spent,
            "alerts": sum(1 for line in self.lines if line.over_threshold),
            "budgets": [line.to_dict() for line in self.lines],
        }


def budget_overview(budgets: Iterable[Any], expenses: Iterable[Any], *, month: str) -> BudgetOverview:
    """Progress for every active budget in *month*."""

    expense_list = list(expenses)
    lines = []
    for budget in budgets:
        if field_value(budget, "is_active", "isActive", default=True) is False:
            continue
        if field_value(budget, "budget_month", "budgetMonth") != month:
            continue
        lines.append(budget_progress(budget, spent_for_budget(budget, expense_list)))
    lines.sort(key=lambda line: line.category.lower())
    return BudgetOverview(month=month, lines=lines)


def savings_progress(goal: Any) -> Decimal:
    current = amount_of(goal, "current_amount", "currentAmount")
    target = amount_of(goal, "target_amount", "targetAmount")
    return quantize_cents(min(percent(current, target), HUNDRED))


def months_to_goal(goal: Any) -> int | None:
    """Months of contributions left, 0 when reached, ``None`` without contributions."""

    current = amount_of(goal, "current_amount", "currentAmount")
    target = amount_of(goal, "target_amount", "targetAmount")
    remaining = target - current
    if remaining <= 0:
        return 0
    contribution = amount_of(goal, "monthly_contribution", "monthlyContribution")
    if contribution <= 0:
        return None
    return math.ceil(remaining / contribution)


def goal_summary(goal: Any) -> dict[str, Any]:
    return {
        "id": field_value(goal, "id"),
        "name": field_value(goal, "name"),
        "progress": savings_progress(goal),
        "months_to_goal": months_to_goal(goal),
    }


__all__ = [
    "BudgetOverview",
    "BudgetProgress",
    "budget_overview",
    "budget_progress",
    "goal_summary",
    "months_to_goal",
    "savings_progress",
    "spent_for_budget",
]
