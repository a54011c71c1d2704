"""Budget and savings goal service tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from bizbook.services import budgeting

FOOD = {"id": 1, "category": "Food", "monthly_allocation": 500, "budget_month": "2024-01"}


@pytest.mark.parametrize(
    ("spent", "progress", "over"),
    [
        (400, Decimal("80.00"), False),
        (450, Decimal("90.00"), True),
        (600, Decimal("100.00"), True),
    ],
)
def test_budget_progress_caps_display_but_flags_overspend(spent, progress, over):
    line = budgeting.budget_progress(FOOD, spent)

    assert line.progress == progress
    assert line.over_threshold is over


def test_remaining_goes_negative_when_overspent():
    line = budgeting.budget_progress(FOOD, 600)

    assert line.remaining == Decimal("-100.00")
    assert line.to_dict()["budget_id"] == 1


def test_custom_alert_threshold():
    budget = {**FOOD, "alert_threshold": 95}

    assert budgeting.budget_progress(budget, 450).over_threshold is False


def test_zero_allocation_never_alerts():
    line = budgeting.budget_progress({**FOOD, "monthly_allocation": 0}, 250)

    assert line.progress == Decimal("0.00")
    assert line.over_threshold is False


def test_spent_matches_category_case_insensitively_within_month():
    expenses = [
        {"category": "food", "amount": 100, "expense_date": "2024-01-04"},
        {"category": "Food ", "amount": 50, "expense_date": "2024-01-28"},
        {"category": "Food", "amount": 999, "expense_date": "2024-02-01"},
        {"category": "Rent", "amount": 1000, "expense_date": "2024-01-01"},
    ]

    assert budgeting.spent_for_budget(FOOD, expenses) == Decimal("150.00")


def test_budget_overview_filters_month_and_counts_alerts():
    budgets = [
        {"id": 2, "category": "Rent", "monthly_allocation": 1000, "budget_month": "2024-01"},
        FOOD,
        {"id": 3, "category": "Old", "monthly_allocation": 10, "budget_month": "2023-12"},
    ]
    expenses = [
        {"category": "Food", "amount": 150, "expense_date": "2024-01-04"},
        {"category": "Rent", "amount": 1000, "expense_date": "2024-01-01"},
    ]

    overview = budgeting.budget_overview(budgets, expenses, month="2024-01")
    payload = overview.to_dict()

    assert [line.category for line in overview.lines] == ["Food", "Rent"]
    assert payload["alerts"] == 1
    assert payload["total_allocated"] == Decimal("1500.00")
    assert payload["total_spent"] == Decimal("1150.00")
    assert payload["total_remaining"] == Decimal("350.00")


class TestSavingsGoals:
    def test_progress_and_months_left(self):
        goal = {"target_amount": 1000, "current_amount": 250, "monthly_contribution": 100}

        assert budgeting.savings_progress(goal) == Decimal("25.00")
        assert budgeting.months_to_goal(goal) == 8

    def test_reached_goal(self):
        goal = {"target_amount": 1000, "current_amount": 1200, "monthly_contribution": 100}

        assert budgeting.savings_progress(goal) == Decimal("100.00")
        assert budgeting.months_to_goal(goal) == 0

    def test_no_contribution_means_unknown(self):
        goal = {"target_amount": 1000, "current_amount": 100}

        assert budgeting.months_to_goal(goal) is None
        assert budgeting.goal_summary({**goal, "id": 4, "name": "Trip"})["months_to_goal"] is None


def test_negative_expenses_do_not_reduce_spend():
    expenses = [
        {"category": "Food", "amount": -250, "expense_date": "2024-01-04"},
        {"category": "Food", "amount": 100, "expense_date": "2024-01-05"},
    ]

    assert budgeting.spent_for_budget(FOOD, expenses) == Decimal("100.00")
