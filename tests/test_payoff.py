"""Tests for the single-debt amortized payoff calculator."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from bizbook.services.debts import MAX_PAYOFF_MONTHS, PayoffStatus, calculate_payoff


class TestPayoffBasics:
    def test_zero_interest_divides_evenly(self):
        """1200 at 0% paying 100/month clears in exactly 12 months."""
        result = calculate_payoff(1200, 0, 100, start=date(2024, 1, 15))

        assert result.status is PayoffStatus.PAID_OFF
        assert result.months == 12
        assert result.total_interest == Decimal("0.00")
        assert result.total_paid == Decimal("1200.00")
        assert len(result.schedule) == 12
        assert result.schedule[-1].balance == Decimal("0.00")
        assert result.payoff_date == date(2025, 1, 15)

    def test_zero_interest_uses_ceiling_of_months(self):
        result = calculate_payoff(1000, 0, 300)

        assert result.months == 4
        assert result.schedule[-1].payment == Decimal("100.00")

    def test_zero_balance_is_already_paid_off(self):
        result = calculate_payoff(0, 19.99, 0)

        assert result.status is PayoffStatus.PAID_OFF
        assert result.months == 0
        assert result.total_interest == Decimal("0.00")
        assert result.schedule == []

    def test_extra_payment_shortens_payoff(self):
        baseline = calculate_payoff(1200, 0, 100)
        accelerated = calculate_payoff(1200, 0, 100, extra_payment=100)

        assert accelerated.months == 6
        assert accelerated.months < baseline.months

    def test_first_month_interest(self):
        """12% APR is 1% a month on the opening balance."""
        result = calculate_payoff(1000, 12, 100)

        first = result.schedule[0]
        assert first.interest == Decimal("10.00")
        assert first.principal == Decimal("90.00")
        assert first.balance == Decimal("910.00")

    def test_payoff_date_clamps_to_month_end(self):
        result = calculate_payoff(100, 0, 100, start=date(2024, 1, 31))

        assert result.payoff_date == date(2024, 2, 29)

    def test_string_inputs_are_accepted(self):
        result = calculate_payoff("$1,200.00", "0", "100")

        assert result.months == 12


class TestPayoffTermination:
    @pytest.mark.parametrize(
        "balance, rate, payment",
        [
            (5000, 18, 150),
            (250000, "6.5", 1600),
            (1000, 24, 25),
            ("3210.55", "29.99", 120),
        ],
    )
    def test_payment_above_interest_terminates_at_zero(self, balance, rate, payment):
        result = calculate_payoff(balance, rate, payment)

        assert result.status is PayoffStatus.PAID_OFF
        assert result.months >= 1
        assert result.months == len(result.schedule)
        assert result.schedule[-1].balance == Decimal("0.00")
        principal_paid = sum(row.principal for row in result.schedule)
        # Each row is rounded to cents independently.
        assert abs(principal_paid - Decimal(str(balance))) <= Decimal("0.005") * result.months
        assert abs(result.total_paid - result.total_interest - Decimal(str(balance))) <= Decimal(
            "0.05"
        )

    @pytest.mark.parametrize("payment", [100, 50, 0])
    def test_payment_not_covering_interest_is_reported(self, payment):
        """10,000 at 12% accrues 100/month; paying no more never reduces principal."""
        result = calculate_payoff(10000, 12, payment)

        assert result.status is PayoffStatus.INSUFFICIENT_PAYMENT
        assert not result.pays_off
        assert result.months == 0
        assert result.payoff_date is None
        assert result.schedule == []

    def test_iteration_cap(self):
        result = calculate_payoff(1200, 0, 100, max_months=6)

        assert result.status is PayoffStatus.CAP_REACHED
        assert result.months == 6
        assert result.payoff_date is None

    def test_default_cap_is_a_century(self):
        """A payment a fraction of a cent above interest would take longer than 1200 months."""
        result = calculate_payoff(100000, 12, "1000.001")

        assert result.status is PayoffStatus.CAP_REACHED
        assert result.months == MAX_PAYOFF_MONTHS


class TestPayoffValidation:
    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"balance": -1, "interest_rate": 5, "monthly_payment": 10}, "balance"),
            ({"balance": "abc", "interest_rate": 5, "monthly_payment": 10}, "balance"),
            ({"balance": 100, "interest_rate": "-2", "monthly_payment": 10}, "interest_rate"),
            ({"balance": 100, "interest_rate": 5, "monthly_payment": None}, "monthly_payment"),
            (
                {"balance": 100, "interest_rate": 5, "monthly_payment": 10, "extra_payment": "x"},
                "extra_payment",
            ),
        ],
    )
    def test_invalid_inputs_return_an_error_result(self, kwargs, field):
        result = calculate_payoff(**kwargs)

        assert result.status is PayoffStatus.INVALID_INPUT
        assert result.pays_off is False
        assert result.months == 0
        assert result.payoff_date is None
        assert result.schedule == []
        assert list(result.errors) == [field]

    def test_every_bad_field_is_reported(self):
        result = calculate_payoff("abc", "-5", None)

        assert result.status is PayoffStatus.INVALID_INPUT
        assert set(result.errors) == {"balance", "interest_rate", "monthly_payment"}
        assert result.errors["balance"] == ["Enter a valid number."]

        payload = result.to_dict()
        assert payload["status"] == "invalid_input"
        assert payload["errors"]["interest_rate"] == ["Amount must be at least zero."]

    def test_to_dict_can_omit_schedule(self):
        payload = calculate_payoff(1200, 0, 100).to_dict(include_schedule=False)

        assert "schedule" not in payload
        assert payload["status"] == "paid_off"
        assert payload["pays_off"] is True
