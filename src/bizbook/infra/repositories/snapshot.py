"""SQLModel implementation of the net worth snapshot repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models import NetWorthSnapshot
from .records import SQLModelRecordRepository


class SQLModelSnapshotRepository(SQLModelRecordRepository[NetWorthSnapshot]):
    def __init__(self, session_factory, **kwargs) -> None:
        kwargs.setdefault("resource", "net-worth-snapshots")
        kwargs.setdefault("order_by", "snapshot_date")
        kwargs.setdefault("descending", True)
        super().__init__(NetWorthSnapshot, session_factory, **kwargs)

    def latest(self, *, user_id: int) -> Optional[NetWorthSnapshot]:
        """Most recent snapshot by date (newest id breaks ties)."""
        with self.session_factory() as session:
            statement = self._ordered(
                select(NetWorthSnapshot).where(NetWorthSnapshot.user_id == user_id)
            )
            return session.exec(statement).first()
