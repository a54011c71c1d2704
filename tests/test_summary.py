"""Dashboard composition tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from bizbook.models import (
    Asset,
    Budget,
    CreditCard,
    Expense,
    Income,
    Investment,
    Liability,
    Loan,
    SavingsGoal,
)
from bizbook.services.summary import (
    DASHBOARD_RESOURCES,
    UserRecords,
    build_dashboard,
    debt_accounts,
    load_records,
)


@pytest.fixture
def populated(repositories, user):
    uid = user.id
    repositories.credit_cards.create(
        CreditCard(name="Visa", balance=500.0, credit_limit=1000.0, interest_rate=20.0, minimum_payment=25.0, due_date=25),
        user_id=uid,
    )
    repositories.credit_cards.create(
        CreditCard(name="Closed", balance=0.0, credit_limit=500.0, is_active=False), user_id=uid
    )
    repositories.loans.create(
        Loan(name="Car", balance=1000.0, interest_rate=0.0, monthly_payment=100.0, due_date=5),
        user_id=uid,
    )
    repositories.liabilities.create(Liability(name="Tax bill", current_balance=300.0), user_id=uid)
    repositories.assets.create(
        Asset(name="Checking", asset_type="cash_liquid", current_value=2000.0), user_id=uid
    )
    repositories.income.create(
        Income(source="Salary", amount=3000.0, frequency="monthly", next_pay_date=date(2024, 1, 5)),
        user_id=uid,
    )
    repositories.expenses.create(
        Expense(description="Groceries", amount=450.0, category="Food", expense_date=date(2024, 1, 12)),
        user_id=uid,
    )
    repositories.budgets.create(
        Budget(category="Food", monthly_allocation=500.0, budget_month="2024-01"), user_id=uid
    )
    repositories.savings_goals.create(
        SavingsGoal(name="Trip", target_amount=1000.0, current_amount=250.0, monthly_contribution=100.0),
        user_id=uid,
    )
    repositories.investments.create(
        Investment(account_name="IRA", balance=1000.0, contribution_amount=0.0, expected_return=10.0),
        user_id=uid,
    )
    return load_records(repositories, user_id=uid)


def test_load_records_reads_every_collection(populated):
    assert len(populated.credit_cards) == 2
    assert len(populated.loans) == 1
    assert len(populated.investments) == 1


def test_debt_accounts_skip_inactive_cards(populated):
    accounts = debt_accounts(populated)

    assert sorted((a.kind, a.name) for a in accounts) == [
        ("credit_card", "Visa"),
        ("liability", "Tax bill"),
        ("loan", "Car"),
    ]


def test_dashboard_figures(populated, today):
    dashboard = build_dashboard(populated, today=today)

    assert dashboard["as_of"] == "2024-01-20"
    assert dashboard["net_worth"]["total_assets"] == Decimal("2000.00")
    assert dashboard["net_worth"]["total_liabilities"] == Decimal("1800.00")
    assert dashboard["net_worth"]["net_worth"] == Decimal("200.00")
    assert dashboard["credit_utilization"] == Decimal("50.00")
    assert dashboard["cash_flow"]["net_cash_flow"] == Decimal("2550.00")
    assert dashboard["cash_flow"]["available_cash"] == Decimal("4550.00")
    assert dashboard["debt"]["total_balance"] == Decimal("1800.00")
    assert dashboard["debt"]["total_minimum_payments"] == Decimal("125.00")
    assert dashboard["debt"]["debt_free_date"] is not None
    assert dashboard["budgets"]["alerts"] == 1
    assert dashboard["savings_goals"][0]["progress"] == Decimal("25.00")
    assert dashboard["savings_goals"][0]["months_to_goal"] == 8
    assert dashboard["investments"]["projected_value"] == Decimal("2593.74")


def test_dashboard_upcoming_items(populated, today):
    dashboard = build_dashboard(populated, today=today)

    assert [(i["kind"], i["due_on"]) for i in dashboard["upcoming_payments"]] == [
        ("credit_card", "2024-01-25"),
        ("loan", "2024-02-05"),
    ]
    assert [(i["name"], i["days_until"]) for i in dashboard["upcoming_income"]] == [("Salary", 16)]

    short = build_dashboard(populated, today=today, within_days=7)
    assert [i["kind"] for i in short["upcoming_payments"]] == ["credit_card"]
    assert short["upcoming_income"] == []


def test_empty_dashboard(today):
    dashboard = build_dashboard(UserRecords(), today=today)

    assert dashboard["net_worth"]["net_worth"] == Decimal("0.00")
    assert dashboard["debt"]["debt_free_date"] is None
    assert dashboard["upcoming_payments"] == []
    assert dashboard["budgets"]["budgets"] == []


def test_payments_do_not_affect_dashboard():
    assert "payments" not in DASHBOARD_RESOURCES
    assert "expenses" in DASHBOARD_RESOURCES
