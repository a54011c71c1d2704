"""Tests for credit utilization and available credit."""

from __future__ import annotations

from decimal import Decimal

from bizbook.services.credit import available_credit, credit_utilization


def test_utilization_is_aggregate_balance_over_limit():
    cards = [{"balance": 500, "credit_limit": 1000}, {"balance": 0, "credit_limit": 0}]

    assert credit_utilization(cards) == Decimal("50.00")


def test_zero_total_limit_yields_zero():
    assert credit_utilization([{"balance": 250, "credit_limit": 0}]) == Decimal("0")
    assert credit_utilization([]) == Decimal("0")


def test_utilization_reads_string_amounts():
    cards = [{"balance": "$1,250.00", "credit_limit": "5,000"}]

    assert credit_utilization(cards) == Decimal("25.00")


def test_over_limit_balances_can_exceed_one_hundred_percent():
    assert credit_utilization([{"balance": 1500, "credit_limit": 1000}]) == Decimal("150.00")


def test_available_credit_ignores_maxed_out_cards():
    cards = [
        {"balance": 500, "credit_limit": 1000},
        {"balance": 1200, "credit_limit": 1000},
        {"balance": None, "credit_limit": "300"},
    ]

    assert available_credit(cards) == Decimal("800.00")


def test_utilization_is_idempotent():
    cards = [{"balance": 333.33, "credit_limit": 1000}]

    assert credit_utilization(cards) == credit_utilization(cards) == Decimal("33.33")


def test_negative_balances_count_as_zero():
    cards = [
        {"balance": -500, "credit_limit": 1000},
        {"balance": 500, "credit_limit": 1000},
    ]

    assert credit_utilization(cards) == Decimal("25.00")
    assert available_credit(cards) == Decimal("1500.00")


def test_negative_limit_adds_no_credit():
    cards = [{"balance": 100, "credit_limit": -1000}, {"balance": 100, "credit_limit": 400}]

    assert credit_utilization(cards) == Decimal("50.00")
    assert available_credit(cards) == Decimal("300.00")
