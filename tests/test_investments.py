"""Investment projection tests."""

from __future__ import annotations

from decimal import Decimal

from bizbook.services.investments import annual_contribution, portfolio_summary, projected_value


def test_annual_contribution_by_frequency():
    assert annual_contribution(100, "monthly") == Decimal("1200.00")
    assert annual_contribution(100, "weekly") == Decimal("5200.00")
    assert annual_contribution(100, "Quarterly") == Decimal("400.00")
    assert annual_contribution(100, None) == Decimal("1200.00")


def test_projection_without_growth_is_linear():
    assert projected_value(1000, 100, "monthly", 0, years=10) == Decimal("13000.00")


def test_projection_compounds_yearly():
    assert projected_value(1000, 0, "monthly", 10, years=2) == Decimal("1210.00")
    assert projected_value(0, 1000, "annually", 10, years=2) == Decimal("2100.00")


def test_non_positive_horizon_returns_balance():
    assert projected_value("2500.5", 100, "monthly", 7, years=0) == Decimal("2500.50")


def test_portfolio_summary_totals_accounts():
    summary = portfolio_summary(
        [
            {"balance": 1000, "contribution_amount": 0, "expected_return": 10},
            {"balance": 0, "contribution_amount": 1000, "contribution_frequency": "annually", "expected_return": 10},
        ],
        years=2,
    )

    assert summary == {
        "total_balance": Decimal("1000.00"),
        "annual_contributions": Decimal("1000.00"),
        "projected_value": Decimal("3310.00"),
        "years": 2,
    }
