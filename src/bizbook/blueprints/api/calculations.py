"""Calculation and summary endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from flask import current_app, request

from ...errors import ValidationError
from ...extensions import get_repositories, get_state
from ...models import NetWorthSnapshot
from ...services.budgeting import budget_overview
from ...services.credit import available_credit, credit_utilization
from ...services.debts import STRATEGIES, PayoffStatus, calculate_payoff, plan_payoff
from ...services.due_dates import month_bounds, upcoming_payments
from ...services.money import ZERO, amount_of, quantize_cents
from ...services.net_worth import cash_flow_summary, is_liquid, net_worth_summary
from ...services.summary import (
    DASHBOARD_VIEW,
    UserRecords,
    build_dashboard,
    debt_accounts,
    load_records,
)
from ..auth.guard import current_user_id
from . import bp
from .responses import listing, serialize, success

MAX_LOOKAHEAD_DAYS = 366


def _pick(payload: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in payload:
            return payload[name]
    return None


def _month_arg() -> str:
    month = (request.args.get("month") or "").strip() or date.today().strftime("%Y-%m")
    try:
        month_bounds(month)
    except ValueError as exc:
        raise ValidationError(errors={"month": ["Enter a month as YYYY-MM."]}) from exc
    return month


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


@bp.get("/")
def index():
    rules = sorted(
        {
            rule.rule
            for rule in current_app.url_map.iter_rules()
            if rule.rule.startswith("/api")
        }
    )
    return success(
        {"name": f"{current_app.config['APP_NAME']} API", "status": "ok", "endpoints": rules}
    )


@bp.post("/calculate-payoff")
def calculate_payoff_route():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Expected a JSON object.")
    start_raw = _pick(payload, "start_date", "startDate")
    start = None
    if start_raw:
        try:
            start = date.fromisoformat(str(start_raw)[:10])
        except ValueError as exc:
            raise ValidationError(errors={"start_date": ["Enter a date as YYYY-MM-DD."]}) from exc
    result = calculate_payoff(
        _pick(payload, "balance"),
        _pick(payload, "interest_rate", "interestRate"),
        _pick(payload, "monthly_payment", "monthlyPayment"),
        _pick(payload, "extra_payment", "extraPayment"),
        start=start,
    )
    if result.status is PayoffStatus.INVALID_INPUT:
        raise ValidationError("Invalid payoff inputs.", errors=result.errors)
    raw_schedule = _pick(payload, "include_schedule", "includeSchedule")
    include_schedule = True if raw_schedule is None else _flag(raw_schedule)
    return success(result.to_dict(include_schedule=include_schedule))


@bp.post("/calculate-net-worth")
def calculate_net_worth_route():
    repos = get_repositories()
    user_id = current_user_id()
    summary = net_worth_summary(
        repos.assets.list_all(user_id=user_id),
        repos.liabilities.list_all(user_id=user_id),
        repos.credit_cards.list_all(user_id=user_id),
        repos.loans.list_all(user_id=user_id),
    )
    data = summary.to_dict()
    if _flag(request.args.get("snapshot", "")):
        snapshot = repos.snapshots.create(
            NetWorthSnapshot(
                snapshot_date=date.today(),
                total_assets=float(summary.total_assets),
                total_liabilities=float(summary.total_liabilities),
                net_worth=float(summary.net_worth),
                liquid_assets=float(summary.liquid_assets),
            ),
            user_id=user_id,
        )
        data["snapshot"] = serialize(snapshot)
    return success(data)


@bp.get("/credit-utilization")
def credit_utilization_route():
    cards = [
        card
        for card in get_repositories().credit_cards.list_all(user_id=current_user_id())
        if card.is_active
    ]
    return success(
        {
            "utilization": credit_utilization(cards),
            "total_balance": quantize_cents(sum((amount_of(c, "balance") for c in cards), ZERO)),
            "total_limit": quantize_cents(
                sum((amount_of(c, "credit_limit") for c in cards), ZERO)
            ),
            "available_credit": available_credit(cards),
            "card_count": len(cards),
        }
    )


@bp.get("/cash-flow")
def cash_flow_route():
    month = _month_arg()
    repos = get_repositories()
    user_id = current_user_id()
    cash_assets = [asset for asset in repos.assets.list_all(user_id=user_id) if is_liquid(asset)]
    summary = cash_flow_summary(
        repos.income.list_all(user_id=user_id),
        repos.expenses.list_all(user_id=user_id),
        cash_assets,
        month=month,
    )
    return success({"month": month, **summary.to_dict()})


@bp.get("/budgets/progress")
def budget_progress_route():
    month = _month_arg()
    repos = get_repositories()
    user_id = current_user_id()
    overview = budget_overview(
        repos.budgets.list_all(user_id=user_id),
        repos.expenses.list_all(user_id=user_id),
        month=month,
    )
    return success(overview.to_dict())


@bp.get("/upcoming-payments")
def upcoming_payments_route():
    days = request.args.get("days", default=30, type=int)
    if not 0 <= days <= MAX_LOOKAHEAD_DAYS:
        raise ValidationError(
            errors={"days": [f"Enter a whole number between 0 and {MAX_LOOKAHEAD_DAYS}."]}
        )
    repos = get_repositories()
    user_id = current_user_id()
    items = upcoming_payments(
        repos.credit_cards.list_all(user_id=user_id),
        repos.loans.list_all(user_id=user_id),
        within_days=days,
    )
    return listing([item.to_dict() for item in items])


@bp.get("/dashboard")
def dashboard_route():
    state = get_state()
    user_id = current_user_id()
    today = date.today()
    data = state.views.get_or_compute(
        DASHBOARD_VIEW,
        user_id,
        lambda: build_dashboard(load_records(state.repositories, user_id=user_id), today=today),
        key=today.isoformat(),
    )
    return success(data)


@bp.get("/debt-plan")
def debt_plan_route():
    strategy = (request.args.get("strategy") or "avalanche").strip().lower()
    if strategy not in STRATEGIES:
        raise ValidationError(errors={"strategy": [f"Choose one of: {', '.join(STRATEGIES)}."]})
    repos = get_repositories()
    user_id = current_user_id()
    records = UserRecords(
        credit_cards=repos.credit_cards.list_all(user_id=user_id),
        loans=repos.loans.list_all(user_id=user_id),
        liabilities=repos.liabilities.list_all(user_id=user_id),
    )
    plan = plan_payoff(
        debt_accounts(records), strategy=strategy, surplus=request.args.get("surplus")
    )
    return success(plan.to_dict())
