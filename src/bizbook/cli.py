"""Flask CLI commands for BizBook."""

from __future__ import annotations

from datetime import date

import click

from .errors import BizBookError, ValidationError
from .services.money import format_currency

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo-password"


def _describe_errors(errors: dict[str, list[str]]) -> str:
    return "; ".join(f"{name}: {' '.join(messages)}" for name, messages in errors.items())


def _describe(exc: BizBookError) -> str:
    if isinstance(exc, ValidationError) and exc.errors:
        return _describe_errors(exc.errors)
    return exc.message


def _seed_demo_records(repositories, user_id: int, *, today: date) -> int:
    """Create a small, realistic set of records for *user_id*; returns the count."""

    from .models import (
        Asset,
        Budget,
        CreditCard,
        Expense,
        Income,
        Investment,
        Liability,
        Loan,
        PurchaseOrder,
        PurchaseOrderItem,
        SavingsGoal,
        Vendor,
    )

    month = today.strftime("%Y-%m")
    salary = repositories.income.create(
        Income(source="Salary", income_type="salary", amount=2400.0, frequency="biweekly"),
        user_id=user_id,
    )
    records = [
        (
            repositories.credit_cards,
            CreditCard(
                name="Everyday Visa",
                last_four="4242",
                balance=1850.0,
                credit_limit=6000.0,
                interest_rate=22.99,
                minimum_payment=55.0,
                due_date=15,
            ),
        ),
        (
            repositories.credit_cards,
            CreditCard(
                name="Business Amex",
                balance=640.0,
                credit_limit=10000.0,
                interest_rate=18.5,
                minimum_payment=35.0,
                due_date=28,
                is_business=True,
            ),
        ),
        (
            repositories.loans,
            Loan(
                name="Car Loan",
                loan_type="auto",
                lender="Credit Union",
                balance=14200.0,
                original_amount=22000.0,
                interest_rate=5.9,
                monthly_payment=410.0,
                term_months=60,
                due_date=5,
            ),
        ),
        (
            repositories.expenses,
            Expense(
                description="Groceries",
                amount=420.0,
                category="Food",
                expense_date=today,
                income_id=salary.id,
            ),
        ),
        (
            repositories.expenses,
            Expense(
                description="Rent",
                amount=1500.0,
                category="Housing",
                expense_date=today,
                is_recurring=True,
                frequency="monthly",
            ),
        ),
        (
            repositories.assets,
            Asset(name="Checking", asset_type="cash_liquid", current_value=5200.0, is_liquid=True),
        ),
        (
            repositories.assets,
            Asset(
                name="Condo",
                asset_type="real_estate",
                current_value=310000.0,
                purchase_price=280000.0,
                ownership_percentage=50.0,
            ),
        ),
        (
            repositories.liabilities,
            Liability(
                name="Mortgage",
                liability_type="real_estate",
                current_balance=190000.0,
                interest_rate=4.1,
                minimum_payment=980.0,
                due_date=1,
            ),
        ),
        (
            repositories.budgets,
            Budget(category="Food", monthly_allocation=500.0, budget_month=month),
        ),
        (
            repositories.budgets,
            Budget(
                category="Housing",
                monthly_allocation=1500.0,
                budget_month=month,
                alert_threshold=95.0,
            ),
        ),
        (
            repositories.savings_goals,
            SavingsGoal(
                name="Emergency fund",
                target_amount=10000.0,
                current_amount=3500.0,
                monthly_contribution=400.0,
                priority="high",
            ),
        ),
        (
            repositories.investments,
            Investment(
                account_name="Retirement",
                account_type="401k",
                balance=48000.0,
                contribution_amount=500.0,
                contribution_frequency="monthly",
                expected_return=6.5,
            ),
        ),
    ]
    for repository, record in records:
        repository.create(record, user_id=user_id)

    vendor = repositories.vendors.create(
        Vendor(company_name="Office Depot", vendor_type="supplies", payment_terms="Net 30"),
        user_id=user_id,
    )
    order = repositories.purchase_orders.create(
        PurchaseOrder(
            vendor_id=vendor.id,
            vendor=vendor.company_name,
            order_number="PO-1001",
            order_date=today,
        ),
        user_id=user_id,
    )
    repositories.purchase_orders.add_item(
        order.id,
        PurchaseOrderItem(description="Printer paper", quantity=10, unit_price=6.49),
        user_id=user_id,
    )
    # income + vendor + order + its line item
    return len(records) + 4


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("bizbook-seed-demo")
    @click.option("--username", default=DEMO_USERNAME, show_default=True)
    @click.option("--password", default=DEMO_PASSWORD, show_default=True)
    def bizbook_seed_demo(username: str, password: str) -> None:
        """Create a demo user with sample records (existing data is replaced)."""

        from .extensions import get_repositories
        from .services.auth import create_user

        repositories = get_repositories(app)
        user = repositories.users.get_by_username(username)
        if user is None:
            try:
                user = create_user(username=username, password=password, users=repositories.users)
            except BizBookError as exc:
                raise click.ClickException(_describe(exc)) from exc
            click.echo(f"Created user {username!r}.")
        else:
            repositories.reset_all(user_id=user.id)
            click.echo(f"Reset existing data for {username!r}.")
        count = _seed_demo_records(repositories, user.id, today=date.today())
        click.echo(f"Seeded {count} records.")

    @app.cli.command("bizbook-payoff")
    @click.argument("balance")
    @click.argument("rate")
    @click.argument("payment")
    @click.option("--extra", default="0", show_default=True, help="Extra monthly payment")
    def bizbook_payoff(balance: str, rate: str, payment: str, extra: str) -> None:
        """Print how long BALANCE at RATE% APR takes to clear paying PAYMENT monthly."""

        from .services.debts import PayoffStatus, calculate_payoff

        result = calculate_payoff(balance, rate, payment, extra)
        if result.status is PayoffStatus.INVALID_INPUT:
            raise click.ClickException(_describe_errors(result.errors))
        if result.status is PayoffStatus.INSUFFICIENT_PAYMENT:
            raise click.ClickException("Payment does not cover the monthly interest.")
        if result.status is PayoffStatus.CAP_REACHED:
            raise click.ClickException(f"Balance is not paid off within {result.months} months.")
        click.echo(f"Months to payoff: {result.months}")
        click.echo(f"Total interest:   {format_currency(result.total_interest)}")
        click.echo(f"Total paid:       {format_currency(result.total_paid)}")
        if result.payoff_date:
            click.echo(f"Payoff date:      {result.payoff_date.isoformat()}")

    @app.cli.command("bizbook-create-user")
    @click.argument("username")
    @click.argument("password")
    @click.option("--email", default=None)
    def bizbook_create_user(username: str, password: str, email: str | None) -> None:
        """Create a login for USERNAME."""

        from .extensions import get_repositories
        from .services.auth import create_user

        try:
            user = create_user(
                username=username,
                password=password,
                email=email,
                users=get_repositories(app).users,
            )
        except BizBookError as exc:
            raise click.ClickException(_describe(exc)) from exc
        click.echo(f"Created user {user.username!r} (id={user.id}).")
