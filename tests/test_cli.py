"""Flask CLI command tests."""

from __future__ import annotations

import pytest


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def test_payoff_command(runner):
    result = runner.invoke(args=["bizbook-payoff", "1000", "0", "100"])

    assert result.exit_code == 0, result.output
    assert "Months to payoff: 10" in result.output
    assert "Total interest:   $0.00" in result.output
    assert "Total paid:       $1,000.00" in result.output


def test_payoff_command_with_extra_payment(runner):
    result = runner.invoke(args=["bizbook-payoff", "1000", "0", "100", "--extra", "100"])

    assert "Months to payoff: 5" in result.output


def test_payoff_command_rejects_insufficient_payment(runner):
    result = runner.invoke(args=["bizbook-payoff", "10000", "24", "100"])

    assert result.exit_code != 0
    assert "Payment does not cover the monthly interest." in result.output


def test_payoff_command_rejects_bad_amount(runner):
    result = runner.invoke(args=["bizbook-payoff", "lots", "5", "100"])

    assert result.exit_code != 0
    assert "balance: Enter a valid number." in result.output


def test_create_user_command(runner, app_repositories):
    result = runner.invoke(args=["bizbook-create-user", "bob", "long-enough-password"])

    assert result.exit_code == 0, result.output
    user = app_repositories.users.get_by_username("bob")
    assert f"Created user 'bob' (id={user.id})." in result.output

    duplicate = runner.invoke(args=["bizbook-create-user", "bob", "long-enough-password"])
    assert duplicate.exit_code != 0
    assert "Username already exists" in duplicate.output


def test_create_user_command_validates_password(runner):
    result = runner.invoke(args=["bizbook-create-user", "bob", "short"])

    assert result.exit_code != 0
    assert "password: Password must be at least 8 characters." in result.output


def test_seed_demo_is_repeatable(runner, app_repositories):
    first = runner.invoke(args=["bizbook-seed-demo"])

    assert first.exit_code == 0, first.output
    assert "Created user 'demo'." in first.output
    assert "Seeded 16 records." in first.output
    demo = app_repositories.users.get_by_username("demo")
    assert len(app_repositories.credit_cards.list_all(user_id=demo.id)) == 2

    second = runner.invoke(args=["bizbook-seed-demo"])

    assert "Reset existing data for 'demo'." in second.output
    assert len(app_repositories.credit_cards.list_all(user_id=demo.id)) == 2
    orders = app_repositories.purchase_orders.list_all(user_id=demo.id)
    assert [len(order.items) for order in orders] == [1]
    vendors = app_repositories.vendors.list_all(user_id=demo.id)
    assert [order.vendor_id for order in orders] == [vendor.id for vendor in vendors]
