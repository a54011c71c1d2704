"""Debt payoff calculators.

``calculate_payoff`` amortizes a single balance month by month. The
snowball/avalanche planners run the same monthly step across several debts,
rolling freed-up minimum payments into the next target.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable

from ..errors import InvalidAmountError
from ..logging_config import get_logger
from .due_dates import add_months
from .money import ZERO, amount_of, field_value, parse_amount, quantize_cents

logger = get_logger(__name__)

MAX_PAYOFF_MONTHS = 1200  # 100 years
_MONTHS_PER_YEAR = Decimal(12)
_HUNDRED = Decimal(100)
_HALF_CENT = Decimal("0.005")


class PayoffStatus(str, Enum):
    PAID_OFF = "paid_off"
    INSUFFICIENT_PAYMENT = "insufficient_payment"
    CAP_REACHED = "cap_reached"
    INVALID_INPUT = "invalid_input"


@dataclass(slots=True, frozen=True)
class PayoffRow:
    """One month of an amortization schedule."""

    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "payment": self.payment,
            "principal": self.principal,
            "interest": self.interest,
            "balance": self.balance,
        }


@dataclass(slots=True)
class PayoffResult:
    """Outcome of a single-debt payoff projection.

    ``months`` and ``payoff_date`` describe a real payoff only when
    ``status`` is ``PAID_OFF``; callers must check :attr:`pays_off`.
    """

    status: PayoffStatus
    months: int
    total_interest: Decimal
    total_paid: Decimal
    payoff_date: date | None
    schedule: list[PayoffRow] = field(default_factory=list)
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def pays_off(self) -> bool:
        return self.status is PayoffStatus.PAID_OFF

    def to_dict(self, *, include_schedule: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status.value,
            "pays_off": self.pays_off,
            "months": self.months,
            "total_interest": self.total_interest,
            "total_paid": self.total_paid,
            "payoff_date": self.payoff_date.isoformat() if self.payoff_date else None,
        }
        if self.errors:
            payload["errors"] = {name: list(messages) for name, messages in self.errors.items()}
        if include_schedule:
            payload["schedule"] = [row.to_dict() for row in self.schedule]
        return payload


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / _HUNDRED / _MONTHS_PER_YEAR


def calculate_payoff(
    balance: Any,
    interest_rate: Any,
    monthly_payment: Any,
    extra_payment: Any = 0,
    *,
    start: date | None = None,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> PayoffResult:
    """Project how long a fixed monthly payment takes to clear *balance*.

    Missing, non-numeric or negative inputs never reach the loop: they yield an
    ``INVALID_INPUT`` result whose ``errors`` map each bad field to messages.
    """

    errors: dict[str, list[str]] = {}
    amounts: dict[str, Decimal] = {}
    for name, value, optional in (
        ("balance", balance, False),
        ("interest_rate", interest_rate, False),
        ("monthly_payment", monthly_payment, False),
        ("extra_payment", extra_payment, True),
    ):
        try:
            amounts[name] = parse_amount(value, field=name, allow_missing=optional)
        except InvalidAmountError as exc:
            errors.update(exc.errors)
    if errors:
        logger.info("Rejected payoff inputs", extra={"fields": sorted(errors)})
        return PayoffResult(
            status=PayoffStatus.INVALID_INPUT,
            months=0,
            total_interest=quantize_cents(ZERO),
            total_paid=quantize_cents(ZERO),
            payoff_date=None,
            errors=errors,
        )

    principal_left = amounts["balance"]
    start = start or date.today()
    if principal_left == 0:
        return PayoffResult(
            status=PayoffStatus.PAID_OFF,
            months=0,
            total_interest=quantize_cents(ZERO),
            total_paid=quantize_cents(ZERO),
            payoff_date=start,
        )

    rate_per_month = monthly_rate(amounts["interest_rate"])
    total_payment = amounts["monthly_payment"] + amounts["extra_payment"]

    schedule: list[PayoffRow] = []
    total_interest = ZERO
    total_paid = ZERO
    months = 0
    status = PayoffStatus.PAID_OFF

    while principal_left > 0:
        if months >= max_months:
            status = PayoffStatus.CAP_REACHED
            break
        interest = principal_left * rate_per_month
        principal = min(total_payment - interest, principal_left)
        if principal <= 0:
            status = PayoffStatus.INSUFFICIENT_PAYMENT
            break

        principal_left -= principal
        if principal_left < _HALF_CENT:
            # A sub-cent remainder is settled with the current payment.
            principal += principal_left
            principal_left = ZERO

        months += 1
        total_interest += interest
        total_paid += principal + interest
        schedule.append(
            PayoffRow(
                month=months,
                payment=quantize_cents(principal + interest),
                principal=quantize_cents(principal),
                interest=quantize_cents(interest),
                balance=quantize_cents(principal_left),
            )
        )

    if status is PayoffStatus.INSUFFICIENT_PAYMENT:
        logger.info(
            "Payment does not cover accruing interest",
            extra={"months_simulated": months},
        )
        # The partial trajectory would read as a payoff plan; report none.
        return PayoffResult(
            status=status,
            months=0,
            total_interest=quantize_cents(ZERO),
            total_paid=quantize_cents(ZERO),
            payoff_date=None,
        )

    return PayoffResult(
        status=status,
        months=months,
        total_interest=quantize_cents(total_interest),
        total_paid=quantize_cents(total_paid),
        payoff_date=add_months(start, months) if status is PayoffStatus.PAID_OFF else None,
        schedule=schedule,
    )


# ---------------------------------------------------------------------------
# Multi-debt strategies
# ---------------------------------------------------------------------------

STRATEGIES = ("snowball", "avalanche")


@dataclass(slots=True)
class DebtAccount:
    """A debt participating in a payoff plan."""

    id: Any
    name: str
    balance: Decimal
    apr: Decimal
    minimum_payment: Decimal
    kind: str = "liability"

    @classmethod
    def from_record(cls, record: Any, *, kind: str) -> "DebtAccount":
        return cls(
            id=field_value(record, "id"),
            name=str(field_value(record, "name", default="")),
            balance=max(amount_of(record, "balance", "current_balance"), ZERO),
            apr=max(amount_of(record, "interest_rate", "apr"), ZERO),
            minimum_payment=max(
                amount_of(record, "minimum_payment", "monthly_payment"), ZERO
            ),
            kind=kind,
        )


@dataclass(slots=True)
class DebtOutcome:
    debt: DebtAccount
    months_to_payoff: int | None = None
    interest_paid: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.debt.id,
            "kind": self.debt.kind,
            "name": self.debt.name,
            "starting_balance": quantize_cents(self.debt.balance),
            "apr": self.debt.apr,
            "minimum_payment": quantize_cents(self.debt.minimum_payment),
            "months_to_payoff": self.months_to_payoff,
            "interest_paid": quantize_cents(self.interest_paid),
        }


@dataclass(slots=True)
class DebtPlan:
    strategy: str
    status: PayoffStatus
    months: int
    total_interest: Decimal
    payoff_date: date | None
    outcomes: list[DebtOutcome]

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "status": self.status.value,
            "months": self.months,
            "total_interest": quantize_cents(self.total_interest),
            "payoff_date": self.payoff_date.isoformat() if self.payoff_date else None,
            "order": [outcome.debt.id for outcome in self.outcomes],
            "debts": [outcome.to_dict() for outcome in self.outcomes],
        }


def _order_debts(debts: Iterable[DebtAccount], strategy: str) -> list[DebtAccount]:
    if strategy == "snowball":
        return sorted(debts, key=lambda d: (d.balance, -d.apr))
    if strategy == "avalanche":
        return sorted(debts, key=lambda d: (-d.apr, d.balance))
    raise ValueError(f"Invalid debt payoff strategy: {strategy!r}")


def plan_payoff(
    debts: Iterable[DebtAccount],
    *,
    strategy: str,
    surplus: Any = 0,
    start: date | None = None,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> DebtPlan:
    """Simulate paying every debt's minimum plus *surplus* on the current target."""

    ordered = [debt for debt in _order_debts(debts, strategy) if debt.balance > 0]
    extra = parse_amount(surplus, field="surplus", allow_missing=True)
    start = start or date.today()
    outcomes = [DebtOutcome(debt=debt) for debt in ordered]
    balances = [debt.balance for debt in ordered]

    months = 0
    rolled_minimums = ZERO
    total_interest = ZERO
    stagnant_periods = 0
    previous_total = sum(balances, ZERO)
    status = PayoffStatus.PAID_OFF

    while any(balance > 0 for balance in balances):
        if months >= max_months:
            status = PayoffStatus.CAP_REACHED
            break
        months += 1
        extra_pool = extra + rolled_minimums

        for index, debt in enumerate(ordered):
            if balances[index] <= 0:
                continue
            interest = balances[index] * monthly_rate(debt.apr)
            owed = balances[index] + interest
            payment = debt.minimum_payment + extra_pool
            extra_pool = ZERO
            outcomes[index].interest_paid += interest
            total_interest += interest

            if payment >= owed:
                balances[index] = ZERO
                outcomes[index].months_to_payoff = months
                extra_pool += payment - owed
                rolled_minimums += debt.minimum_payment
            else:
                balances[index] = owed - payment

        # Balances that stop shrinking will never clear at these payments.
        current_total = sum(balances, ZERO)
        if current_total >= previous_total:
            stagnant_periods += 1
        else:
            stagnant_periods = 0
        if stagnant_periods >= 3:
            status = PayoffStatus.INSUFFICIENT_PAYMENT
            break
        previous_total = current_total

    return DebtPlan(
        strategy=strategy,
        status=status,
        months=months,
        total_interest=total_interest,
        payoff_date=add_months(start, months) if status is PayoffStatus.PAID_OFF else None,
        outcomes=outcomes,
    )


def snowball_plan(debts: Iterable[DebtAccount], *, surplus: Any = 0, **kwargs: Any) -> DebtPlan:
    """Smallest balance first."""
    return plan_payoff(debts, strategy="snowball", surplus=surplus, **kwargs)


def avalanche_plan(debts: Iterable[DebtAccount], *, surplus: Any = 0, **kwargs: Any) -> DebtPlan:
    """Highest APR first."""
    return plan_payoff(debts, strategy="avalanche", surplus=surplus, **kwargs)


__all__ = [
    "MAX_PAYOFF_MONTHS",
    "STRATEGIES",
    "DebtAccount",
    "DebtPlan",
    "PayoffResult",
    "PayoffRow",
    "PayoffStatus",
    "avalanche_plan",
    "calculate_payoff",
    "plan_payoff",
    "snowball_plan",
]
