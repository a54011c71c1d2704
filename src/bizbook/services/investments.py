"""Investment contribution and growth projections."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from .money import HUNDRED, ZERO, amount_of, field_value, quantize_cents, to_amount, to_decimal

CONTRIBUTIONS_PER_YEAR: dict[str, int] = {
    "weekly": 52,
    "biweekly": 26,
    "monthly": 12,
    "quarterly": 4,
    "annually": 1,
}


def annual_contribution(amount: Any, frequency: str | None) -> Decimal:
    """Yearly total of a recurring contribution; unknown frequencies count as monthly."""

    periods = CONTRIBUTIONS_PER_YEAR.get((frequency or "monthly").lower(), 12)
    return quantize_cents(to_amount(amount) * periods)


def projected_value(
    balance: Any,
    contribution: Any,
    frequency: str | None,
    expected_return: Any,
    *,
    years: int = 10,
) -> Decimal:
    """Future value of *balance* plus annual contributions compounding yearly."""

    if years <= 0:
        return quantize_cents(to_amount(balance))
    principal = to_amount(balance)
    yearly = annual_contribution(contribution, frequency)
    rate = to_decimal(expected_return) / HUNDRED
    if rate == 0:
        return quantize_cents(principal + yearly * years)
    growth = (1 + rate) ** years
    return quantize_cents(principal * growth + yearly * ((growth - 1) / rate))


def portfolio_summary(investments: Iterable[Any], *, years: int = 10) -> dict[str, Any]:
    total_balance = ZERO
    total_yearly = ZERO
    total_projected = ZERO
    for investment in investments:
        balance = amount_of(investment, "balance", "current_value")
        amount = field_value(investment, "contribution_amount")
        frequency = field_value(investment, "contribution_frequency")
        total_balance += balance
        total_yearly += annual_contribution(amount, frequency)
        total_projected += projected_value(
            balance,
            amount,
            frequency,
            field_value(investment, "expected_return"),
            years=years,
        )
    return {
        "total_balance": quantize_cents(total_balance),
        "annual_contributions": quantize_cents(total_yearly),
        "projected_value": quantize_cents(total_projected),
        "years": years,
    }


__all__ = ["annual_contribution", "portfolio_summary", "projected_value"]
