"""Dashboard composition for one user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from .budgeting import budget_overview, goal_summary
from .credit import credit_utilization
from .debts import DebtAccount, plan_payoff
from .due_dates import upcoming_incomes, upcoming_payments
from .investments import portfolio_summary
from .money import ZERO, quantize_cents
from .net_worth import cash_flow_summary, is_liquid, net_worth_summary

DASHBOARD_VIEW = "dashboard"

# Resources whose writes change the dashboard.
DASHBOARD_RESOURCES = frozenset(
    {
        "credit-cards",
        "loans",
        "income",
        "expenses",
        "assets",
        "liabilities",
        "budgets",
        "savings-goals",
        "investments",
    }
)

VIEW_DEPENDENCIES = {DASHBOARD_VIEW: DASHBOARD_RESOURCES}


@dataclass(slots=True)
class UserRecords:
    """Everything the dashboard calculators read for one user."""

    credit_cards: list[Any] = field(default_factory=list)
    loans: list[Any] = field(default_factory=list)
    income: list[Any] = field(default_factory=list)
    expenses: list[Any] = field(default_factory=list)
    assets: list[Any] = field(default_factory=list)
    liabilities: list[Any] = field(default_factory=list)
    budgets: list[Any] = field(default_factory=list)
    savings_goals: list[Any] = field(default_factory=list)
    investments: list[Any] = field(default_factory=list)


def load_records(repositories: Any, *, user_id: int) -> UserRecords:
    return UserRecords(
        credit_cards=repositories.credit_cards.list_all(user_id=user_id),
        loans=repositories.loans.list_all(user_id=user_id),
        income=repositories.income.list_all(user_id=user_id),
        expenses=repositories.expenses.list_all(user_id=user_id),
        assets=repositories.assets.list_all(user_id=user_id),
        liabilities=repositories.liabilities.list_all(user_id=user_id),
        budgets=repositories.budgets.list_all(user_id=user_id),
        savings_goals=repositories.savings_goals.list_all(user_id=user_id),
        investments=repositories.investments.list_all(user_id=user_id),
    )


def debt_accounts(records: UserRecords) -> list[DebtAccount]:
    """Active cards, loans and liabilities as payoff-plan inputs."""

    accounts = [
        DebtAccount.from_record(card, kind="credit_card")
        for card in records.credit_cards
        if card.is_active
    ]
    accounts += [DebtAccount.from_record(loan, kind="loan") for loan in records.loans if loan.is_active]
    accounts += [DebtAccount.from_record(item, kind="liability") for item in records.liabilities]
    return accounts


def _total(values: Iterable[Decimal]) -> Decimal:
    return quantize_cents(sum(values, ZERO))


def build_dashboard(records: UserRecords, *, today: date, within_days: int = 30) -> dict[str, Any]:
    month = today.strftime("%Y-%m")
    worth = net_worth_summary(
        records.assets, records.liabilities, records.credit_cards, records.loans
    )
    cash_assets = [asset for asset in records.assets if is_liquid(asset)]
    flow = cash_flow_summary(records.income, records.expenses, cash_assets, month=month)
    debts = debt_accounts(records)
    plan = plan_payoff(debts, strategy="avalanche", start=today) if debts else None

    return {
        "as_of": today.isoformat(),
        "net_worth": worth.to_dict(),
        "cash_flow": flow.to_dict(),
        "credit_utilization": credit_utilization(
            card for card in records.credit_cards if card.is_active
        ),
        "debt": {
            "total_balance": _total(debt.balance for debt in debts),
            "total_minimum_payments": _total(debt.minimum_payment for debt in debts),
            "debt_free_date": (
                plan.payoff_date.isoformat() if plan is not None and plan.payoff_date else None
            ),
        },
        "budgets": budget_overview(records.budgets, records.expenses, month=month).to_dict(),
        "savings_goals": [goal_summary(goal) for goal in records.savings_goals],
        "investments": portfolio_summary(records.investments),
        "upcoming_payments": [
            item.to_dict()
            for item in upcoming_payments(
                records.credit_cards, records.loans, today=today, within_days=within_days
            )
        ],
        "upcoming_income": [
            item.to_dict()
            for item in upcoming_incomes(records.income, today=today, within_days=within_days)
        ],
    }


__all__ = [
    "DASHBOARD_RESOURCES",
    "DASHBOARD_VIEW",
    "VIEW_DEPENDENCIES",
    "UserRecords",
    "build_dashboard",
    "debt_accounts",
    "load_records",
]
