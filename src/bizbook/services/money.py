"""Money parsing and formatting helpers.

Every calculator funnels record values through :func:`to_decimal` so that
string-typed, missing or malformed amounts are coerced exactly once and in
exactly one way.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..errors import InvalidAmountError

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")

_STRIP_CHARS = str.maketrans("", "", "$,_ \t")


def _coerce(value: Any) -> Decimal | None:
    """Return a finite Decimal for *value* or ``None`` when it cannot be read."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, int):
        candidate = Decimal(value)
    elif isinstance(value, float):
        candidate = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.translate(_STRIP_CHARS)
        if not text:
            return None
        try:
            candidate = Decimal(text)
        except InvalidOperation:
            return None
    else:
        try:
            candidate = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return None
    if not candidate.is_finite():
        return None
    return candidate


def to_decimal(value: Any) -> Decimal:
    """Coerce a record value to ``Decimal``; anything unreadable becomes zero."""

    coerced = _coerce(value)
    return ZERO if coerced is None else coerced


def to_amount(value: Any) -> Decimal:
    """Like :func:`to_decimal` but negative amounts count as zero."""

    return max(to_decimal(value), ZERO)


def parse_amount(value: Any, *, field: str, allow_missing: bool = False) -> Decimal:
    """Strictly parse a non-negative amount or raise :class:`InvalidAmountError`."""

    if value is None or (isinstance(value, str) and not value.strip()):
        if allow_missing:
            return ZERO
        raise InvalidAmountError(field, "This field is required.")
    coerced = _coerce(value)
    if coerced is None:
        raise InvalidAmountError(field, "Enter a valid number.")
    if coerced < 0:
        raise InvalidAmountError(field, "Amount must be at least zero.")
    return coerced


def quantize_cents(value: Decimal) -> Decimal:
    """Round to cents using half-up rounding."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def percent(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100`` or zero when *whole* is not positive."""

    if whole <= 0:
        return ZERO
    return part / whole * HUNDRED


def format_currency(value: Any) -> str:
    amount = quantize_cents(to_decimal(value))
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def field_value(record: Any, *names: str, default: Any = None) -> Any:
    """Return the first present attribute or key among *names*."""

    for name in names:
        if isinstance(record, Mapping):
            if name in record and record[name] is not None:
                return record[name]
        else:
            value = getattr(record, name, None)
            if value is not None:
                return value
    return default


def amount_of(record: Any, *names: str) -> Decimal:
    """Shorthand for ``to_amount(field_value(record, *names))``.

    Aggregations read record fields through this, so a negative stored value
    never lowers a total.
    """

    return to_amount(field_value(record, *names))


__all__ = [
    "CENT",
    "HUNDRED",
    "ZERO",
    "amount_of",
    "field_value",
    "format_currency",
    "parse_amount",
    "percent",
    "quantize_cents",
    "to_amount",
    "to_decimal",
]
