"""Payload form definitions and validation helpers for the JSON API."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping

from ...errors import ValidationError

REQUIRED = "This field is required."

DEBT_FREQUENCIES = ("weekly", "biweekly", "monthly", "quarterly", "yearly")
INCOME_FREQUENCIES = ("weekly", "biweekly", "monthly", "yearly")
CONTRIBUTION_FREQUENCIES = ("weekly", "biweekly", "monthly", "quarterly", "annually")
LOAN_TYPES = ("personal", "auto", "student", "mortgage", "business")
ASSET_TYPES = (
    "cash_liquid",
    "investments",
    "real_estate",
    "vehicles",
    "personal_property",
    "business",
)
LIABILITY_TYPES = (
    "consumer_debt",
    "vehicle_loans",
    "real_estate",
    "education",
    "business",
    "taxes_bills",
)
PAYOFF_STRATEGIES = ("snowball", "avalanche")
GOAL_PRIORITIES = ("low", "medium", "high")
RISK_LEVELS = ("conservative", "moderate", "aggressive")
PAYMENT_ACCOUNT_TYPES = ("credit_card", "loan", "liability")
PAYMENT_STATUSES = ("pending", "paid", "failed", "cancelled")
ORDER_STATUSES = ("draft", "submitted", "received", "cancelled")

# Anything larger overflows the float and INTEGER columns.
MAX_AMOUNT = Decimal("1000000000000")
MAX_INTEGER = 2**63 - 1

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """How one payload key is parsed and checked."""

    name: str
    kind: str = "text"
    required: bool = False
    nullable: bool = True
    choices: tuple[str, ...] = ()
    minimum: Decimal | None = None
    maximum: Decimal | None = None
    max_length: int | None = None

    @property
    def alias(self) -> str:
        """camelCase spelling accepted for the same key."""

        head, *rest = self.name.split("_")
        return head + "".join(part.capitalize() for part in rest)


def text(name: str, *, required: bool = False, max_length: int = 120) -> FieldSpec:
    return FieldSpec(name, "text", required=required, nullable=not required, max_length=max_length)


def amount(
    name: str,
    *,
    required: bool = False,
    nullable: bool = False,
    maximum: Decimal | None = None,
) -> FieldSpec:
    return FieldSpec(
        name,
        "amount",
        required=required,
        nullable=nullable,
        minimum=Decimal("0"),
        maximum=MAX_AMOUNT if maximum is None else maximum,
    )


def rate(name: str, *, nullable: bool = False) -> FieldSpec:
    """Percentage between 0 and 100."""
    return amount(name, nullable=nullable, maximum=Decimal("100"))


def integer(
    name: str, *, required: bool = False, minimum: int | None = None, maximum: int | None = None
) -> FieldSpec:
    return FieldSpec(
        name,
        "integer",
        required=required,
        nullable=not required,
        minimum=Decimal(minimum) if minimum is not None else None,
        maximum=Decimal(MAX_INTEGER if maximum is None else maximum),
    )


def day_of_month(name: str = "due_date") -> FieldSpec:
    return integer(name, minimum=1, maximum=31)


def boolean(name: str) -> FieldSpec:
    return FieldSpec(name, "boolean", nullable=False)


def date_field(name: str, *, required: bool = False) -> FieldSpec:
    return FieldSpec(name, "date", required=required, nullable=not required)


def datetime_field(name: str) -> FieldSpec:
    return FieldSpec(name, "datetime")


def choice(
    name: str, choices: Iterable[str], *, required: bool = False, nullable: bool = False
) -> FieldSpec:
    return FieldSpec(name, "choice", required=required, nullable=nullable, choices=tuple(choices))


def month(name: str, *, required: bool = False) -> FieldSpec:
    return FieldSpec(name, "month", required=required, nullable=not required)


@dataclass(slots=True)
class PayloadForm:
    """Validates a JSON payload against field specs, collecting per-field errors.

    In ``partial`` mode (PATCH/PUT) absent keys are left alone and required
    checks only apply to keys that are present.
    """

    specs: tuple[FieldSpec, ...]
    data: Mapping[str, Any]
    partial: bool = False
    cleaned: Dict[str, Any] = field(default_factory=dict, init=False)
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        """Validate inputs returning True when all values are acceptable."""

        self.errors.clear()
        self.cleaned.clear()
        if not isinstance(self.data, Mapping):
            self.errors.setdefault("_payload", []).append("Expected a JSON object.")
            return False

        for spec in self.specs:
            present, raw = self._lookup(spec)
            if not present:
                if spec.required and not self.partial:
                    self._error(spec.name, REQUIRED)
                continue
            if raw is None or (isinstance(raw, str) and not raw.strip() and spec.kind != "text"):
                if spec.required:
                    self._error(spec.name, REQUIRED)
                elif spec.nullable:
                    self.cleaned[spec.name] = None
                else:
                    self._error(spec.name, "This field may not be null.")
                continue
            parser = getattr(self, f"_parse_{spec.kind}")
            value = parser(spec, raw)
            if spec.name not in self.errors:
                self.cleaned[spec.name] = value
        return not self.errors

    def raise_for_errors(self) -> Dict[str, Any]:
        """Return the cleaned values or raise :class:`ValidationError`."""

        if not self.validate():
            raise ValidationError(errors=self.errors)
        return dict(self.cleaned)

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages

    # -- parsing ---------------------------------------------------------

    def _lookup(self, spec: FieldSpec) -> tuple[bool, Any]:
        for key in (spec.name, spec.alias):
            if key in self.data:
                return True, self.data[key]
        return False, None

    def _error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)

    def _check_range(self, spec: FieldSpec, value: Decimal) -> None:
        if spec.minimum is not None and value < spec.minimum:
            message = (
                "Amount must be at least zero."
                if spec.minimum == 0
                else f"Must be at least {spec.minimum}."
            )
            self._error(spec.name, message)
        elif spec.maximum is not None and value > spec.maximum:
            self._error(spec.name, f"Must be at most {spec.maximum}.")

    def _parse_text(self, spec: FieldSpec, raw: Any) -> str | None:
        if not isinstance(raw, str):
            self._error(spec.name, "Enter text.")
            return None
        value = raw.strip()
        if spec.required and not value:
            self._error(spec.name, REQUIRED)
        elif spec.max_length is not None and len(value) > spec.max_length:
            self._error(spec.name, f"Must be at most {spec.max_length} characters.")
        return value

    def _parse_amount(self, spec: FieldSpec, raw: Any) -> float | None:
        if isinstance(raw, bool):
            self._error(spec.name, "Enter a valid number.")
            return None
        try:
            value = Decimal(str(raw).replace(",", "").replace("$", "").strip())
        except (InvalidOperation, TypeError, ValueError):
            self._error(spec.name, "Enter a valid number.")
            return None
        if not value.is_finite():
            self._error(spec.name, "Enter a valid number.")
            return None
        self._check_range(spec, value)
        return float(value)

    def _parse_integer(self, spec: FieldSpec, raw: Any) -> int | None:
        if isinstance(raw, bool):
            self._error(spec.name, "Enter a whole number.")
            return None
        try:
            value = Decimal(str(raw).strip())
        except (InvalidOperation, TypeError, ValueError):
            self._error(spec.name, "Enter a whole number.")
            return None
        if not value.is_finite() or value != value.to_integral_value():
            self._error(spec.name, "Enter a whole number.")
            return None
        self._check_range(spec, value)
        return int(value)

    def _parse_boolean(self, spec: FieldSpec, raw: Any) -> bool | None:
        if isinstance(raw, bool):
            return raw
        normalized = str(raw).strip().lower()
        if normalized in _TRUE:
            return True
        if normalized in _FALSE:
            return False
        self._error(spec.name, "Enter true or false.")
        return None

    def _parse_date(self, spec: FieldSpec, raw: Any) -> date | None:
        if isinstance(raw, date) and not isinstance(raw, datetime):
            return raw
        try:
            return date.fromisoformat(str(raw).strip()[:10])
        except ValueError:
            self._error(spec.name, "Enter a date as YYYY-MM-DD.")
            return None

    def _parse_datetime(self, spec: FieldSpec, raw: Any) -> datetime | None:
        if isinstance(raw, datetime):
            return raw
        try:
            return datetime.fromisoformat(str(raw).strip().replace("Z", "+00:00"))
        except ValueError:
            self._error(spec.name, "Enter an ISO 8601 timestamp.")
            return None

    def _parse_choice(self, spec: FieldSpec, raw: Any) -> str | None:
        value = str(raw).strip().lower()
        if value not in spec.choices:
            self._error(spec.name, f"Choose one of: {', '.join(spec.choices)}.")
            return None
        return value

    def _parse_month(self, spec: FieldSpec, raw: Any) -> str | None:
        value = str(raw).strip()
        if not _MONTH_PATTERN.match(value):
            self._error(spec.name, "Enter a month as YYYY-MM.")
            return None
        return value


CREDIT_CARD_FIELDS = (
    text("name", required=True),
    FieldSpec("last_four", "text", max_length=4),
    amount("balance"),
    amount("credit_limit"),
    rate("interest_rate"),
    amount("minimum_payment"),
    day_of_month(),
    boolean("is_active"),
    boolean("is_business"),
)

LOAN_FIELDS = (
    text("name", required=True),
    choice("loan_type", LOAN_TYPES),
    text("lender"),
    amount("balance"),
    amount("original_amount", nullable=True),
    rate("interest_rate"),
    amount("monthly_payment"),
    integer("term_months", minimum=1, maximum=1200),
    day_of_month(),
    boolean("is_active"),
    boolean("is_business"),
)

INCOME_FIELDS = (
    text("source", required=True),
    text("income_type", max_length=32),
    amount("amount", required=True),
    choice("frequency", INCOME_FREQUENCIES),
    date_field("next_pay_date"),
    boolean("taxable"),
    boolean("is_active"),
)

EXPENSE_FIELDS = (
    text("description", required=True, max_length=255),
    amount("amount", required=True),
    text("category", required=True, max_length=64),
    date_field("expense_date", required=True),
    text("payment_method", max_length=32),
    text("merchant"),
    boolean("is_recurring"),
    choice("frequency", DEBT_FREQUENCIES, nullable=True),
    boolean("tax_deductible"),
    integer("income_id", minimum=1),
    boolean("is_business"),
)

ASSET_FIELDS = (
    text("name", required=True),
    choice("asset_type", ASSET_TYPES),
    amount("current_value", required=True),
    amount("purchase_price", nullable=True),
    boolean("is_liquid"),
    rate("appreciation_rate", nullable=True),
    rate("depreciation_rate", nullable=True),
    rate("ownership_percentage"),
)

LIABILITY_FIELDS = (
    text("name", required=True),
    choice("liability_type", LIABILITY_TYPES),
    amount("current_balance", required=True),
    amount("original_amount", nullable=True),
    rate("interest_rate"),
    amount("minimum_payment"),
    day_of_month(),
    choice("payment_frequency", DEBT_FREQUENCIES),
    choice("payoff_strategy", PAYOFF_STRATEGIES),
)

BUDGET_FIELDS = (
    text("category", required=True, max_length=64),
    amount("monthly_allocation", required=True),
    rate("alert_threshold"),
    month("budget_month", required=True),
    boolean("is_active"),
)

SAVINGS_GOAL_FIELDS = (
    text("name", required=True),
    amount("target_amount", required=True),
    amount("current_amount"),
    amount("monthly_contribution"),
    date_field("target_date"),
    choice("priority", GOAL_PRIORITIES),
)

INVESTMENT_FIELDS = (
    text("account_name", required=True),
    text("account_type", max_length=32),
    text("institution"),
    amount("balance"),
    amount("contribution_amount"),
    choice("contribution_frequency", CONTRIBUTION_FREQUENCIES),
    rate("expected_return"),
    choice("risk_level", RISK_LEVELS),
)

PAYMENT_FIELDS = (
    integer("account_id", required=True, minimum=1),
    choice("account_type", PAYMENT_ACCOUNT_TYPES, required=True),
    amount("amount", required=True),
    date_field("payment_date", required=True),
    text("payment_method", max_length=32),
    text("confirmation_number", max_length=64),
    choice("status", PAYMENT_STATUSES),
    datetime_field("paid_at"),
    text("notes", max_length=500),
)

VENDOR_FIELDS = (
    text("company_name", required=True, max_length=255),
    text("contact_person", max_length=255),
    text("email", max_length=255),
    text("phone", max_length=20),
    text("address", max_length=500),
    text("vendor_type", max_length=100),
    text("payment_terms", max_length=100),
    text("tax_id", max_length=20),
    boolean("is_active"),
    text("notes", max_length=500),
)

PURCHASE_ORDER_FIELDS = (
    integer("vendor_id", minimum=1),
    text("vendor", max_length=255),
    text("order_number", max_length=64),
    choice("status", ORDER_STATUSES),
    date_field("order_date", required=True),
    text("notes", max_length=500),
)

PURCHASE_ORDER_ITEM_FIELDS = (
    text("description", required=True, max_length=255),
    amount("quantity", required=True),
    amount("unit_price", required=True),
)

SNAPSHOT_FIELDS = (
    date_field("snapshot_date", required=True),
    amount("total_assets"),
    amount("total_liabilities"),
    FieldSpec("net_worth", "amount", nullable=False, minimum=-MAX_AMOUNT, maximum=MAX_AMOUNT),
    amount("liquid_assets"),
)

__all__ = [
    "ASSET_FIELDS",
    "BUDGET_FIELDS",
    "CREDIT_CARD_FIELDS",
    "EXPENSE_FIELDS",
    "FieldSpec",
    "INCOME_FIELDS",
    "INVESTMENT_FIELDS",
    "LIABILITY_FIELDS",
    "LOAN_FIELDS",
    "PAYMENT_FIELDS",
    "PURCHASE_ORDER_FIELDS",
    "PURCHASE_ORDER_ITEM_FIELDS",
    "PayloadForm",
    "SAVINGS_GOAL_FIELDS",
    "SNAPSHOT_FIELDS",
    "VENDOR_FIELDS",
]
