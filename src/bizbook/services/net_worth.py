"""Net-worth and cash-flow aggregation."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable

from .credit import available_credit
from .due_dates import month_key
from .money import HUNDRED, ZERO, amount_of, field_value, quantize_cents, to_amount

# Monthly multipliers used across the dashboard. Weekly/biweekly use the
# rounded 52/12 and 26/12 factors so figures match what users expect.
MONTHLY_FACTORS: dict[str, Decimal] = {
    "weekly": Decimal("4.33"),
    "biweekly": Decimal("2.17"),
    "monthly": Decimal("1"),
    "quarterly": Decimal("1") / Decimal("3"),
    "yearly": Decimal("1") / Decimal("12"),
}
_FREQUENCY_ALIASES = {
    "bi-weekly": "biweekly",
    "annually": "yearly",
    "annual": "yearly",
}

LIQUID_ASSET_TYPE = "cash_liquid"


def normalize_frequency(frequency: Any) -> str:
    text = str(frequency or "monthly").strip().lower()
    text = _FREQUENCY_ALIASES.get(text, text)
    return text if text in MONTHLY_FACTORS else "monthly"


def to_monthly(amount: Decimal, frequency: Any) -> Decimal:
    """Normalize *amount* paid at *frequency* to a monthly figure."""

    return amount * MONTHLY_FACTORS[normalize_frequency(frequency)]


def _is_active(record: Any) -> bool:
    return field_value(record, "is_active", "isActive", default=True) is not False


@dataclass(slots=True)
class NetWorthSummary:
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    liquid_assets: Decimal
    available_credit: Decimal
    buying_power: Decimal
    assets_by_type: dict[str, Decimal] = field(default_factory=dict)
    liabilities_by_type: dict[str, Decimal] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_assets": self.total_assets,
            "total_liabilities": self.total_liabilities,
            "net_worth": self.net_worth,
            "liquid_assets": self.liquid_assets,
            "available_credit": self.available_credit,
            "buying_power": self.buying_power,
            "assets_by_type": dict(self.assets_by_type),
            "liabilities_by_type": dict(self.liabilities_by_type),
        }


def asset_value(asset: Any) -> Decimal:
    """Current value scaled by the owned share (100% when unspecified)."""

    value = amount_of(asset, "current_value", "currentValue", "value")
    share = field_value(asset, "ownership_percentage", "ownershipPercentage")
    if share is None:
        return value
    return value * to_amount(share) / HUNDRED


def is_liquid(asset: Any) -> bool:
    if field_value(asset, "is_liquid", "isLiquid", default=False) is True:
        return True
    return field_value(asset, "asset_type", "assetType") == LIQUID_ASSET_TYPE


def net_worth_summary(
    assets: Iterable[Any],
    liabilities: Iterable[Any],
    credit_cards: Iterable[Any] = (),
    loans: Iterable[Any] = (),
) -> NetWorthSummary:
    """Aggregate assets against every kind of debt the user tracks."""

    cards = list(credit_cards)
    assets_by_type: dict[str, Decimal] = defaultdict(lambda: ZERO)
    liabilities_by_type: dict[str, Decimal] = defaultdict(lambda: ZERO)
    liquid = ZERO

    for asset in assets:
        if not _is_active(asset):
            continue
        value = asset_value(asset)
        assets_by_type[str(field_value(asset, "asset_type", "assetType", default="other"))] += value
        if is_liquid(asset):
            liquid += value

    for liability in liabilities:
        if not _is_active(liability):
            continue
        balance = amount_of(liability, "current_balance", "currentBalance", "balance")
        kind = str(field_value(liability, "liability_type", "liabilityType", default="other"))
        liabilities_by_type[kind] += balance

    for card in cards:
        if _is_active(card):
            liabilities_by_type["credit_cards"] += amount_of(card, "balance")
    for loan in loans:
        if _is_active(loan):
            liabilities_by_type["loans"] += amount_of(loan, "balance", "current_balance")

    total_assets = sum(assets_by_type.values(), ZERO)
    total_liabilities = sum(liabilities_by_type.values(), ZERO)
    credit_headroom = available_credit(card for card in cards if _is_active(card))

    return NetWorthSummary(
        total_assets=quantize_cents(total_assets),
        total_liabilities=quantize_cents(total_liabilities),
        net_worth=quantize_cents(total_assets - total_liabilities),
        liquid_assets=quantize_cents(liquid),
        available_credit=credit_headroom,
        buying_power=quantize_cents(liquid + credit_headroom),
        assets_by_type={key: quantize_cents(value) for key, value in sorted(assets_by_type.items())},
        liabilities_by_type={
            key: quantize_cents(value) for key, value in sorted(liabilities_by_type.items())
        },
    )


def monthly_income(incomes: Iterable[Any]) -> Decimal:
    total = ZERO
    for income in incomes:
        if not _is_active(income):
            continue
        total += to_monthly(amount_of(income, "amount"), field_value(income, "frequency"))
    return quantize_cents(total)


def monthly_expenses(expenses: Iterable[Any], *, month: str | None = None) -> Decimal:
    """Monthly outflow: recurring expenses normalized, one-offs counted in *month*.

    Without a *month* every one-off expense is counted.
    """

    total = ZERO
    for expense in expenses:
        amount = amount_of(expense, "amount")
        if field_value(expense, "is_recurring", "isRecurring", default=False) is True:
            total += to_monthly(amount, field_value(expense, "frequency"))
            continue
        if month is None or month_key(field_value(expense, "expense_date", "expenseDate")) == month:
            total += amount
    return quantize_cents(total)


@dataclass(slots=True)
class CashFlowSummary:
    monthly_income: Decimal
    monthly_expenses: Decimal
    net_cash_flow: Decimal
    available_cash: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "monthly_income": self.monthly_income,
            "monthly_expenses": self.monthly_expenses,
            "net_cash_flow": self.net_cash_flow,
            "available_cash": self.available_cash,
        }


def cash_flow_summary(
    incomes: Iterable[Any],
    expenses: Iterable[Any],
    cash_assets: Iterable[Any] = (),
    *,
    month: str | None = None,
) -> CashFlowSummary:
    income_total = monthly_income(incomes)
    expense_total = monthly_expenses(expenses, month=month)
    net = income_total - expense_total
    cash = sum((asset_value(asset) for asset in cash_assets), ZERO)
    return CashFlowSummary(
        monthly_income=income_total,
        monthly_expenses=expense_total,
        net_cash_flow=quantize_cents(net),
        available_cash=quantize_cents(max(ZERO, cash + net)),
    )


__all__ = [
    "MONTHLY_FACTORS",
    "CashFlowSummary",
    "NetWorthSummary",
    "asset_value",
    "cash_flow_summary",
    "is_liquid",
    "monthly_expenses",
    "monthly_income",
    "net_worth_summary",
    "normalize_frequency",
    "to_monthly",
]
