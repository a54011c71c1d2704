"""Payload validation tests."""

from __future__ import annotations

from datetime import date

import pytest

from bizbook.blueprints.api.forms import (
    BUDGET_FIELDS,
    CREDIT_CARD_FIELDS,
    EXPENSE_FIELDS,
    FieldSpec,
    PayloadForm,
)
from bizbook.errors import ValidationError


def _errors(specs, data, **kwargs):
    form = PayloadForm(specs, data, **kwargs)
    form.validate()
    return form.errors


def test_valid_card_payload_is_cleaned():
    values = PayloadForm(
        CREDIT_CARD_FIELDS,
        {"name": "  Visa ", "balance": "$1,200.50", "creditLimit": 5000, "due_date": "15", "is_active": "yes"},
    ).raise_for_errors()

    assert values == {
        "name": "Visa",
        "balance": 1200.5,
        "credit_limit": 5000.0,
        "due_date": 15,
        "is_active": True,
    }


def test_camel_case_alias():
    assert FieldSpec("minimum_payment").alias == "minimumPayment"
    assert FieldSpec("name").alias == "name"


def test_required_fields_reported_together():
    errors = _errors(EXPENSE_FIELDS, {})

    assert errors["description"] == ["This field is required."]
    assert errors["amount"] == ["This field is required."]
    assert errors["expense_date"] == ["This field is required."]


@pytest.mark.parametrize(
    ("payload", "field", "message"),
    [
        ({"name": "x", "balance": "abc"}, "balance", "Enter a valid number."),
        ({"name": "x", "balance": -5}, "balance", "Amount must be at least zero."),
        ({"name": "x", "balance": True}, "balance", "Enter a valid number."),
        ({"name": "x", "balance": "NaN"}, "balance", "Enter a valid number."),
        ({"name": "x", "balance": "1e400"}, "balance", "Must be at most 1000000000000."),
        ({"name": "x", "credit_limit": 10**15}, "credit_limit", "Must be at most 1000000000000."),
        ({"name": "x", "interest_rate": 120}, "interest_rate", "Must be at most 100."),
        ({"name": "x", "due_date": 32}, "due_date", "Must be at most 31."),
        ({"name": "x", "due_date": 0}, "due_date", "Must be at least 1."),
        ({"name": "x", "due_date": 2.5}, "due_date", "Enter a whole number."),
        ({"name": "x", "is_active": "maybe"}, "is_active", "Enter true or false."),
        ({"name": "x", "balance": None}, "balance", "This field may not be null."),
        ({"name": "x", "last_four": "12345"}, "last_four", "Must be at most 4 characters."),
        ({"name": 42}, "name", "Enter text."),
        ({"name": "   "}, "name", "This field is required."),
    ],
)
def test_card_field_errors(payload, field, message):
    assert _errors(CREDIT_CARD_FIELDS, payload)[field] == [message]


def test_month_and_date_formats():
    errors = _errors(BUDGET_FIELDS, {"category": "Food", "monthly_allocation": 10, "budget_month": "2024-13"})
    assert errors == {"budget_month": ["Enter a month as YYYY-MM."]}

    errors = _errors(EXPENSE_FIELDS, {"description": "x", "amount": 1, "category": "c", "expense_date": "01/02/2024"})
    assert errors == {"expense_date": ["Enter a date as YYYY-MM-DD."]}


def test_choice_is_case_insensitive():
    values = PayloadForm(
        EXPENSE_FIELDS,
        {"description": "Gym", "amount": 30, "category": "Health", "expense_date": "2024-01-05", "frequency": "Monthly"},
    ).raise_for_errors()

    assert values["frequency"] == "monthly"
    assert values["expense_date"] == date(2024, 1, 5)

    assert _errors(EXPENSE_FIELDS, {"frequency": "daily"}, partial=True) == {
        "frequency": ["Choose one of: weekly, biweekly, monthly, quarterly, yearly."]
    }


def test_partial_mode_only_checks_present_keys():
    form = PayloadForm(CREDIT_CARD_FIELDS, {"balance": 10}, partial=True)

    assert form.validate() is True
    assert form.cleaned == {"balance": 10.0}


def test_partial_mode_still_rejects_clearing_required_fields():
    assert _errors(CREDIT_CARD_FIELDS, {"name": None}, partial=True) == {
        "name": ["This field is required."]
    }


def test_raise_for_errors_carries_field_messages():
    form = PayloadForm(CREDIT_CARD_FIELDS, {"balance": "abc"})

    with pytest.raises(ValidationError) as excinfo:
        form.raise_for_errors()

    assert excinfo.value.errors == {
        "name": ["This field is required."],
        "balance": ["Enter a valid number."],
    }
    assert sorted(form.error_messages) == ["Enter a valid number.", "This field is required."]


def test_non_mapping_payload():
    assert _errors(CREDIT_CARD_FIELDS, ["not", "a", "dict"]) == {"_payload": ["Expected a JSON object."]}
