"""Credit utilization helpers."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from .money import ZERO, amount_of, percent, quantize_cents

_BALANCE_FIELDS = ("balance", "current_balance")
_LIMIT_FIELDS = ("credit_limit", "creditLimit", "limit")


def credit_utilization(cards: Iterable[Any]) -> Decimal:
    """Aggregate utilization across *cards* as a percentage.

    Returns zero when the combined limit is zero so the result is always a
    displayable number.
    """

    total_balance = ZERO
    total_limit = ZERO
    for card in cards:
        total_balance += amount_of(card, *_BALANCE_FIELDS)
        total_limit += amount_of(card, *_LIMIT_FIELDS)
    return quantize_cents(percent(total_balance, total_limit))


def available_credit(cards: Iterable[Any]) -> Decimal:
    """Sum of unused credit, never negative per card."""

    total = ZERO
    for card in cards:
        headroom = amount_of(card, *_LIMIT_FIELDS) - amount_of(card, *_BALANCE_FIELDS)
        if headroom > 0:
            total += headroom
    return quantize_cents(total)


__all__ = ["available_credit", "credit_utilization"]
