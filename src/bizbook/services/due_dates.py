"""Due-date arithmetic for cards, loans and pay schedules."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Iterable

from .money import amount_of, field_value, quantize_cents

MIN_DAY = 1
MAX_DAY = 31


def _clamp_day(year: int, month: int, day: int) -> date:
    """Return ``date(year, month, day)`` with *day* capped at the month's length."""

    last_day = monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def add_months(value: date, months: int, *, day: int | None = None) -> date:
    """Shift *value* by whole calendar months, clamping to the target month's end.

    ``day`` overrides the day-of-month to aim for, which keeps a recurring
    "31st" schedule on the last day of short months without drifting.
    """

    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    return _clamp_day(year, month, day or value.day)


def coerce_date(value: Any) -> date | None:
    """Read a ``date`` from a date, datetime or ISO string; ``None`` otherwise."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def month_bounds(month: str) -> tuple[date, date]:
    """Return the first and last day of a ``YYYY-MM`` month.

    Raises:
        ValueError: when *month* is not a valid ``YYYY-MM`` string.
    """

    try:
        year_text, month_text = month.strip().split("-")
        first = date(int(year_text), int(month_text), 1)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Expected a YYYY-MM month, got {month!r}") from exc
    return first, _clamp_day(first.year, first.month, MAX_DAY)


def month_key(value: Any) -> str | None:
    parsed = coerce_date(value)
    return parsed.strftime("%Y-%m") if parsed else None


def _validate_day(day_of_month: int) -> int:
    try:
        day = int(day_of_month)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid day of month: {day_of_month!r}") from exc
    if not MIN_DAY <= day <= MAX_DAY:
        raise ValueError(f"Day of month must be between {MIN_DAY} and {MAX_DAY}, got {day}")
    return day


def next_due_date(day_of_month: int, *, today: date | None = None) -> date:
    """Return the next date strictly after *today* falling on *day_of_month*.

    Days missing from a month (the 31st in April, the 30th in February)
    resolve to that month's last day.
    """

    day = _validate_day(day_of_month)
    today = today or date.today()
    candidate = _clamp_day(today.year, today.month, day)
    if candidate <= today:
        candidate = add_months(candidate, 1, day=day)
    return candidate


def days_until_due(day_of_month: int, *, today: date | None = None) -> int:
    today = today or date.today()
    return (next_due_date(day_of_month, today=today) - today).days


@dataclass(slots=True, frozen=True)
class UpcomingItem:
    """A single dated obligation or receipt for dashboard panels."""

    kind: str
    record_id: Any
    name: str
    amount: Decimal
    due_on: date
    days_until: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "id": self.record_id,
            "name": self.name,
            "amount": self.amount,
            "due_on": self.due_on.isoformat(),
            "days_until": self.days_until,
        }


def _parse_day(record: Any) -> int | None:
    raw = field_value(record, "due_date", "dueDate")
    if raw is None:
        return None
    try:
        return _validate_day(int(str(raw).strip()))
    except ValueError:
        return None


def upcoming_payments(
    cards: Iterable[Any],
    loans: Iterable[Any],
    *,
    today: date | None = None,
    within_days: int = 30,
) -> list[UpcomingItem]:
    """List card and loan payments due within the window, soonest first.

    Records without a usable due day or marked inactive are skipped.
    """

    today = today or date.today()
    items: list[UpcomingItem] = []
    sources = (
        ("credit_card", cards, ("minimum_payment", "minimumPayment")),
        ("loan", loans, ("monthly_payment", "monthlyPayment", "minimum_payment")),
    )
    for kind, records, amount_fields in sources:
        for record in records:
            if field_value(record, "is_active", "isActive", default=True) is False:
                continue
            day = _parse_day(record)
            if day is None:
                continue
            due_on = next_due_date(day, today=today)
            days = (due_on - today).days
            if days > within_days:
                continue
            items.append(
                UpcomingItem(
                    kind=kind,
                    record_id=field_value(record, "id"),
                    name=str(field_value(record, "name", "cardName", "loanName", default="")),
                    amount=quantize_cents(amount_of(record, *amount_fields)),
                    due_on=due_on,
                    days_until=days,
                )
            )
    items.sort(key=lambda item: (item.due_on, item.kind, item.name))
    return items


_PAY_STEPS = {
    "weekly": timedelta(weeks=1),
    "biweekly": timedelta(weeks=2),
}


def advance_pay_date(pay_date: date, frequency: str | None, *, today: date) -> date:
    """Roll *pay_date* forward by its frequency until it is on or after *today*."""

    frequency = (frequency or "monthly").lower()
    step = _PAY_STEPS.get(frequency)
    current = pay_date
    if step is not None:
        if current < today:
            periods = -(-(today - current).days // step.days)
            current = current + step * periods
        return current
    months = 12 if frequency == "yearly" else 1
    anchor_day = pay_date.day
    shifts = 0
    while current < today:
        shifts += months
        current = add_months(pay_date, shifts, day=anchor_day)
    return current


def upcoming_incomes(
    incomes: Iterable[Any],
    *,
    today: date | None = None,
    within_days: int = 30,
) -> list[UpcomingItem]:
    """List expected pay dates within the window, soonest first."""

    today = today or date.today()
    items: list[UpcomingItem] = []
    for record in incomes:
        if field_value(record, "is_active", "isActive", default=True) is False:
            continue
        pay_date = coerce_date(field_value(record, "next_pay_date", "nextPayDate"))
        if pay_date is None:
            continue
        pay_on = advance_pay_date(pay_date, field_value(record, "frequency"), today=today)
        days = (pay_on - today).days
        if days > within_days:
            continue
        items.append(
            UpcomingItem(
                kind="income",
                record_id=field_value(record, "id"),
                name=str(field_value(record, "source", default="")),
                amount=quantize_cents(amount_of(record, "amount")),
                due_on=pay_on,
                days_until=days,
            )
        )
    items.sort(key=lambda item: (item.due_on, item.name))
    return items


__all__ = [
    "UpcomingItem",
    "add_months",
    "advance_pay_date",
    "coerce_date",
    "days_until_due",
    "month_bounds",
    "month_key",
    "next_due_date",
    "upcoming_incomes",
    "upcoming_payments",
]
