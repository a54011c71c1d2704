"""Net worth and cash flow aggregation tests."""

from __future__ import annotations

from decimal import Decimal

from bizbook.services.net_worth import (
    asset_value,
    cash_flow_summary,
    monthly_expenses,
    monthly_income,
    net_worth_summary,
)


def test_net_worth_is_assets_minus_liabilities():
    assets = [
        {"asset_type": "cash_liquid", "current_value": 1000},
        {"asset_type": "vehicle", "current_value": 500},
    ]
    liabilities = [{"liability_type": "personal", "current_balance": 300}]

    summary = net_worth_summary(assets, liabilities)

    assert summary.total_assets == Decimal("1500.00")
    assert summary.total_liabilities == Decimal("300.00")
    assert summary.net_worth == Decimal("1200.00")
    assert summary.liquid_assets == Decimal("1000.00")


def test_cards_and_loans_count_as_liabilities():
    summary = net_worth_summary(
        [{"asset_type": "cash_liquid", "current_value": 1000}],
        [{"liability_type": "personal", "current_balance": 300}],
        credit_cards=[{"balance": 200, "credit_limit": 1000}],
        loans=[{"balance": 1000}],
    )

    assert summary.total_liabilities == Decimal("1500.00")
    assert summary.net_worth == Decimal("-500.00")
    assert summary.available_credit == Decimal("800.00")
    assert summary.buying_power == Decimal("1800.00")
    assert summary.liabilities_by_type == {
        "credit_cards": Decimal("200.00"),
        "loans": Decimal("1000.00"),
        "personal": Decimal("300.00"),
    }


def test_partial_ownership_and_inactive_assets():
    assert asset_value({"current_value": 300000, "ownership_percentage": 50}) == Decimal("150000")

    summary = net_worth_summary(
        [
            {"asset_type": "real_estate", "current_value": 300000, "ownership_percentage": 50},
            {"asset_type": "vehicle", "current_value": 9000, "is_active": False},
        ],
        [],
    )

    assert summary.total_assets == Decimal("150000.00")
    assert summary.assets_by_type == {"real_estate": Decimal("150000.00")}


def test_empty_inputs_give_zero():
    summary = net_worth_summary([], [])

    assert summary.net_worth == Decimal("0.00")
    assert summary.to_dict()["assets_by_type"] == {}


def test_monthly_income_normalizes_frequencies():
    assert monthly_income([{"amount": 100, "frequency": "weekly"}]) == Decimal("433.00")
    assert monthly_income([{"amount": 12000, "frequency": "yearly"}]) == Decimal("1000.00")
    assert monthly_income([{"amount": 1000, "frequency": "biweekly"}]) == Decimal("2170.00")
    assert monthly_income([{"amount": 500, "frequency": "monthly", "is_active": False}]) == Decimal(
        "0.00"
    )


def test_monthly_expenses_counts_one_offs_in_month_only():
    expenses = [
        {"amount": 50, "is_recurring": True, "frequency": "weekly"},
        {"amount": 100, "expense_date": "2024-01-10"},
        {"amount": 70, "expense_date": "2024-02-03"},
    ]

    assert monthly_expenses(expenses, month="2024-01") == Decimal("316.50")
    assert monthly_expenses(expenses) == Decimal("386.50")


def test_cash_flow_summary():
    summary = cash_flow_summary(
        [{"amount": 3000, "frequency": "monthly"}],
        [{"amount": 1000, "expense_date": "2024-01-10"}],
        [{"current_value": 500}],
        month="2024-01",
    )

    assert summary.net_cash_flow == Decimal("2000.00")
    assert summary.available_cash == Decimal("2500.00")


def test_available_cash_never_negative():
    summary = cash_flow_summary([], [{"amount": 1000}], [{"current_value": 200}])

    assert summary.net_cash_flow == Decimal("-1000.00")
    assert summary.available_cash == Decimal("0.00")


def test_negative_values_do_not_lower_totals():
    summary = net_worth_summary(
        [{"asset_type": "vehicle", "current_value": -1000}, {"asset_type": "vehicle", "current_value": 500}],
        [{"liability_type": "personal", "current_balance": -200}],
        credit_cards=[{"balance": -50, "credit_limit": 100}],
        loans=[{"balance": -75}],
    )

    assert summary.total_assets == Decimal("500.00")
    assert summary.total_liabilities == Decimal("0.00")
    assert summary.net_worth == Decimal("500.00")


def test_negative_income_and_expense_amounts_count_as_zero():
    incomes = [{"amount": -1000, "frequency": "monthly"}, {"amount": 2000, "frequency": "monthly"}]
    expenses = [
        {"amount": -300, "expense_date": "2024-01-10"},
        {"amount": 100, "expense_date": "2024-01-11"},
    ]

    assert monthly_income(incomes) == Decimal("2000.00")
    assert monthly_expenses(expenses, month="2024-01") == Decimal("100.00")
