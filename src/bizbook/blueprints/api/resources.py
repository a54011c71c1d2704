"""CRUD routes for every user-owned resource."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional

from flask import request

from ...errors import NotFoundError, ValidationError
from ...extensions import get_repositories
from ...infra.repositories import Repositories
from ...models import (
    Asset,
    Budget,
    CreditCard,
    Expense,
    Income,
    Investment,
    Liability,
    Loan,
    NetWorthSnapshot,
    Payment,
    PurchaseOrder,
    PurchaseOrderItem,
    SavingsGoal,
    Vendor,
)
from ..auth.guard import current_user_id
from . import bp
from .forms import (
    ASSET_FIELDS,
    BUDGET_FIELDS,
    CREDIT_CARD_FIELDS,
    EXPENSE_FIELDS,
    INCOME_FIELDS,
    INVESTMENT_FIELDS,
    LIABILITY_FIELDS,
    LOAN_FIELDS,
    PAYMENT_FIELDS,
    PURCHASE_ORDER_FIELDS,
    PURCHASE_ORDER_ITEM_FIELDS,
    SAVINGS_GOAL_FIELDS,
    SNAPSHOT_FIELDS,
    VENDOR_FIELDS,
    FieldSpec,
    PayloadForm,
)
from .responses import listing, no_content, serialize, serialize_item, serialize_order, success

# (cleaned values, user id, existing record or None) -> None; may fill values in place,
# raises ValidationError.
Check = Callable[[dict[str, Any], int, Any], None]
Lister = Callable[[Any, int], list[Any]]


@dataclass(frozen=True, slots=True)
class Resource:
    """One REST collection backed by a repository attribute."""

    name: str
    label: str
    model: type
    fields: tuple[FieldSpec, ...]
    repository: str
    serializer: Callable[[Any], dict[str, Any]] = serialize
    lister: Optional[Lister] = None
    check: Optional[Check] = None

    @property
    def endpoint(self) -> str:
        return self.name.replace("-", "_")

    def repo(self):
        return getattr(get_repositories(), self.repository)


def _payload() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Expected a JSON object.")
    return payload


def _form_values(resource: Resource, *, partial: bool) -> dict[str, Any]:
    return PayloadForm(resource.fields, _payload(), partial=partial).raise_for_errors()


def _query_date(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise ValidationError(errors={name: ["Enter a date as YYYY-MM-DD."]}) from exc


def _query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(errors={name: ["Enter a whole number."]}) from exc


def register_resource(resource: Resource) -> None:
    """Attach list/detail/create/update/delete routes for *resource* to ``bp``."""

    base = f"/{resource.name}"

    def list_records():
        user_id = current_user_id()
        if resource.lister is not None:
            records = resource.lister(resource.repo(), user_id)
        else:
            records = resource.repo().list_all(user_id=user_id)
        return listing([resource.serializer(record) for record in records])

    def get_record(record_id: int):
        record = resource.repo().get_by_id(record_id, user_id=current_user_id())
        if record is None:
            raise NotFoundError(resource.label, record_id)
        return success(resource.serializer(record))

    def create_record():
        user_id = current_user_id()
        values = _form_values(resource, partial=False)
        if resource.check is not None:
            resource.check(values, user_id, None)
        record = resource.repo().create(resource.model(**values), user_id=user_id)
        return success(resource.serializer(record), 201)

    def update_record(record_id: int):
        user_id = current_user_id()
        repo = resource.repo()
        existing = repo.get_by_id(record_id, user_id=user_id)
        if existing is None:
            raise NotFoundError(resource.label, record_id)
        values = _form_values(resource, partial=True)
        if resource.check is not None:
            resource.check(values, user_id, existing)
        record = repo.update(record_id, values, user_id=user_id)
        if record is None:
            raise NotFoundError(resource.label, record_id)
        return success(resource.serializer(record))

    def delete_record(record_id: int):
        if not resource.repo().delete(record_id, user_id=current_user_id()):
            raise NotFoundError(resource.label, record_id)
        return no_content()

    bp.add_url_rule(base, f"list_{resource.endpoint}", list_records, methods=["GET"])
    bp.add_url_rule(base, f"create_{resource.endpoint}", create_record, methods=["POST"])
    bp.add_url_rule(
        f"{base}/<int:record_id>", f"get_{resource.endpoint}", get_record, methods=["GET"]
    )
    bp.add_url_rule(
        f"{base}/<int:record_id>",
        f"update_{resource.endpoint}",
        update_record,
        methods=["PATCH", "PUT"],
    )
    bp.add_url_rule(
        f"{base}/<int:record_id>",
        f"delete_{resource.endpoint}",
        delete_record,
        methods=["DELETE"],
    )


# -- resource-specific filters and checks ------------------------------------


def _list_expenses(repo, user_id: int) -> list[Expense]:
    start, end = _query_date("start_date"), _query_date("end_date")
    if start is not None and end is not None and start > end:
        raise ValidationError(errors={"start_date": ["Start date must not be after end date."]})
    if start is None and end is None:
        return repo.list_all(user_id=user_id)
    return repo.list_between(start, end, user_id=user_id)


def _check_expense(values: dict[str, Any], user_id: int, existing: Any) -> None:
    income_id = values.get("income_id")
    if income_id is None:
        return
    if get_repositories().income.get_by_id(income_id, user_id=user_id) is None:
        raise ValidationError(errors={"income_id": ["Unknown income source."]})


def _list_payments(repo, user_id: int) -> list[Payment]:
    return repo.list_for_account(
        user_id=user_id,
        account_id=_query_int("account_id"),
        account_type=request.args.get("account_type") or None,
    )


_PAYMENT_ACCOUNTS = {
    "credit_card": "credit_cards",
    "loan": "loans",
    "liability": "liabilities",
}


def _check_payment(values: dict[str, Any], user_id: int, existing: Any) -> None:
    if "account_id" not in values and "account_type" not in values:
        return
    account_id = values.get("account_id", getattr(existing, "account_id", None))
    account_type = values.get("account_type", getattr(existing, "account_type", None))
    repositories: Repositories = get_repositories()
    repo = getattr(repositories, _PAYMENT_ACCOUNTS[account_type])
    if repo.get_by_id(account_id, user_id=user_id) is None:
        raise ValidationError(errors={"account_id": [f"Unknown {account_type.replace('_', ' ')}."]})


def _check_purchase_order(values: dict[str, Any], user_id: int, existing: Any) -> None:
    vendor_id = values.get("vendor_id")
    if vendor_id is not None:
        vendor = get_repositories().vendors.get_by_id(vendor_id, user_id=user_id)
        if vendor is None:
            raise ValidationError(errors={"vendor_id": ["Unknown vendor."]})
        if not values.get("vendor"):
            values["vendor"] = vendor.company_name
        return
    if (existing is None or "vendor" in values) and not values.get("vendor"):
        raise ValidationError(errors={"vendor": ["Enter a vendor name or choose a vendor."]})


RESOURCES = (
    Resource("credit-cards", "credit_card", CreditCard, CREDIT_CARD_FIELDS, "credit_cards"),
    Resource("loans", "loan", Loan, LOAN_FIELDS, "loans"),
    Resource("income", "income", Income, INCOME_FIELDS, "income"),
    Resource(
        "expenses",
        "expense",
        Expense,
        EXPENSE_FIELDS,
        "expenses",
        lister=_list_expenses,
        check=_check_expense,
    ),
    Resource("assets", "asset", Asset, ASSET_FIELDS, "assets"),
    Resource("liabilities", "liability", Liability, LIABILITY_FIELDS, "liabilities"),
    Resource("budgets", "budget", Budget, BUDGET_FIELDS, "budgets"),
    Resource("savings-goals", "savings_goal", SavingsGoal, SAVINGS_GOAL_FIELDS, "savings_goals"),
    Resource("investments", "investment", Investment, INVESTMENT_FIELDS, "investments"),
    Resource(
        "payments",
        "payment",
        Payment,
        PAYMENT_FIELDS,
        "payments",
        lister=_list_payments,
        check=_check_payment,
    ),
    Resource(
        "purchase-orders",
        "purchase_order",
        PurchaseOrder,
        PURCHASE_ORDER_FIELDS,
        "purchase_orders",
        serializer=serialize_order,
        check=_check_purchase_order,
    ),
    Resource("vendors", "vendor", Vendor, VENDOR_FIELDS, "vendors"),
    Resource(
        "net-worth-snapshots",
        "net_worth_snapshot",
        NetWorthSnapshot,
        SNAPSHOT_FIELDS,
        "snapshots",
    ),
)

for _resource in RESOURCES:
    register_resource(_resource)


# -- extra routes --------------------------------------------------------------


@bp.patch("/payments/<int:payment_id>/mark-paid")
def mark_payment_paid(payment_id: int):
    payment = get_repositories().payments.mark_paid(payment_id, user_id=current_user_id())
    if payment is None:
        raise NotFoundError("payment", payment_id)
    return success(serialize(payment))


@bp.get("/purchase-orders/<int:order_id>/items")
def list_order_items(order_id: int):
    items = get_repositories().purchase_orders.list_items(order_id, user_id=current_user_id())
    if items is None:
        raise NotFoundError("purchase_order", order_id)
    return listing([serialize_item(item) for item in items])


@bp.post("/purchase-orders/<int:order_id>/items")
def add_order_item(order_id: int):
    values = PayloadForm(PURCHASE_ORDER_ITEM_FIELDS, _payload()).raise_for_errors()
    item = get_repositories().purchase_orders.add_item(
        order_id, PurchaseOrderItem(**values), user_id=current_user_id()
    )
    if item is None:
        raise NotFoundError("purchase_order", order_id)
    return success(serialize_item(item), 201)


@bp.delete("/purchase-orders/<int:order_id>/items/<int:item_id>")
def delete_order_item(order_id: int, item_id: int):
    repo = get_repositories().purchase_orders
    user_id = current_user_id()
    if repo.get_by_id(order_id, user_id=user_id) is None:
        raise NotFoundError("purchase_order", order_id)
    if not repo.delete_item(order_id, item_id, user_id=user_id):
        raise NotFoundError("purchase_order_item", item_id)
    return no_content()


@bp.get("/net-worth-snapshots/latest")
def latest_snapshot():
    snapshot = get_repositories().snapshots.latest(user_id=current_user_id())
    if snapshot is None:
        raise NotFoundError("net_worth_snapshot")
    return success(serialize(snapshot))


@bp.delete("/reset-all")
def reset_all():
    counts = get_repositories().reset_all(user_id=current_user_id())
    return success({"deleted": counts, "total_deleted": sum(counts.values())})
