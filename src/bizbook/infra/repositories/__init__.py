"""Concrete repository implementations using SQLModel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain.repositories import (
    ExpenseRepository,
    PaymentRepository,
    PurchaseOrderRepository,
    RecordRepository,
    SnapshotRepository,
    UserRepository,
)
from ...logging_config import get_logger
from ...models import (
    Asset,
    Budget,
    CreditCard,
    Income,
    Investment,
    Liability,
    Loan,
    SavingsGoal,
    Vendor,
)
from ...services.events import ChangeEvent, ChangeNotifier
from ..database import SessionFactory
from .expense import SQLModelExpenseRepository, SQLModelIncomeRepository
from .payment import SQLModelPaymentRepository
from .purchase_order import SQLModelPurchaseOrderRepository, SQLModelVendorRepository
from .records import SQLModelRecordRepository
from .snapshot import SQLModelSnapshotRepository
from .user import SQLModelUserRepository

logger = get_logger(__name__)


@dataclass(slots=True)
class Repositories:
    """Every repository the API uses, sharing one session factory and notifier."""

    users: UserRepository
    credit_cards: RecordRepository[CreditCard]
    loans: RecordRepository[Loan]
    income: RecordRepository[Income]
    expenses: ExpenseRepository
    assets: RecordRepository[Asset]
    liabilities: RecordRepository[Liability]
    budgets: RecordRepository[Budget]
    savings_goals: RecordRepository[SavingsGoal]
    investments: RecordRepository[Investment]
    payments: PaymentRepository
    purchase_orders: PurchaseOrderRepository
    vendors: RecordRepository[Vendor]
    snapshots: SnapshotRepository
    notifier: Optional[ChangeNotifier] = None
    session_factory: Optional[SessionFactory] = None

    def owned(self) -> list[RecordRepository]:
        """User-owned repositories in a foreign-key safe deletion order."""

        return [
            self.payments,
            self.expenses,
            self.purchase_orders,
            self.vendors,
            self.income,
            self.credit_cards,
            self.loans,
            self.assets,
            self.liabilities,
            self.budgets,
            self.savings_goals,
            self.investments,
            self.snapshots,
        ]

    def reset_all(self, *, user_id: int) -> dict[str, int]:
        """Delete every record the user owns in one transaction.

        The user account itself stays. A failure rolls the whole reset back.
        """

        if self.session_factory is None:
            raise RuntimeError("reset_all needs the shared session factory")
        with self.session_factory() as session:
            counts = {
                repo.resource: repo.delete_all(user_id=user_id, session=session)
                for repo in self.owned()
            }
        logger.warning(
            "User data reset",
            extra={"user_id": user_id, "deleted": sum(counts.values())},
        )
        if self.notifier is not None:
            self.notifier.publish(ChangeEvent(resource="all", action="reset", user_id=user_id))
        return counts


def build_repositories(
    session_factory: SessionFactory, notifier: Optional[ChangeNotifier] = None
) -> Repositories:
    def generic(model, resource: str, order_by: str) -> SQLModelRecordRepository:
        return SQLModelRecordRepository(
            model, session_factory, resource=resource, notifier=notifier, order_by=order_by
        )

    return Repositories(
        users=SQLModelUserRepository(session_factory),
        credit_cards=generic(CreditCard, "credit-cards", "name"),
        loans=generic(Loan, "loans", "name"),
        income=SQLModelIncomeRepository(session_factory, notifier=notifier, order_by="source"),
        expenses=SQLModelExpenseRepository(session_factory, notifier=notifier),
        assets=generic(Asset, "assets", "name"),
        liabilities=generic(Liability, "liabilities", "name"),
        budgets=generic(Budget, "budgets", "category"),
        savings_goals=generic(SavingsGoal, "savings-goals", "name"),
        investments=generic(Investment, "investments", "account_name"),
        payments=SQLModelPaymentRepository(session_factory, notifier=notifier),
        purchase_orders=SQLModelPurchaseOrderRepository(session_factory, notifier=notifier),
        vendors=SQLModelVendorRepository(session_factory, notifier=notifier),
        snapshots=SQLModelSnapshotRepository(session_factory, notifier=notifier),
        notifier=notifier,
        session_factory=session_factory,
    )


__all__ = [
    "Repositories",
    "SQLModelExpenseRepository",
    "SQLModelIncomeRepository",
    "SQLModelPaymentRepository",
    "SQLModelPurchaseOrderRepository",
    "SQLModelRecordRepository",
    "SQLModelSnapshotRepository",
    "SQLModelUserRepository",
    "SQLModelVendorRepository",
    "build_repositories",
]
