"""Purchase order totals."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from .money import ZERO, amount_of, quantize_cents


def line_total(item: Any) -> Decimal:
    return quantize_cents(amount_of(item, "quantity") * amount_of(item, "unit_price", "unitPrice"))


def order_total(items: Iterable[Any]) -> Decimal:
    return sum((line_total(item) for item in items), quantize_cents(ZERO))


__all__ = ["line_total", "order_total"]
