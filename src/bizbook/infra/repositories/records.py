"""Generic SQLModel repository for user-owned tables."""

from __future__ import annotations

from typing import Any, Generic, Mapping, Optional, TypeVar

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.base import OwnedRecord
from ...services.events import ChangeEvent, ChangeNotifier
from ..database import SessionFactory

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=OwnedRecord)

PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})


class SQLModelRecordRepository(Generic[RecordT]):
    """CRUD over one user-owned table, publishing a change event per write."""

    def __init__(
        self,
        model: type[RecordT],
        session_factory: SessionFactory,
        *,
        resource: str,
        notifier: Optional[ChangeNotifier] = None,
        order_by: str = "id",
        descending: bool = False,
    ) -> None:
        self.model = model
        self.session_factory = session_factory
        self.resource = resource
        self.notifier = notifier
        self.order_by = order_by
        self.descending = descending

    # -- queries ---------------------------------------------------------

    def _select(self):
        return select(self.model)

    def _ordered(self, statement):
        column = getattr(self.model, self.order_by)
        if self.descending:
            return statement.order_by(column.desc(), self.model.id.desc())  # type: ignore[union-attr]
        return statement.order_by(column, self.model.id)  # type: ignore[arg-type]

    def _fetch(self, session: Session, record_id: int, user_id: int) -> Optional[RecordT]:
        statement = self._select().where(
            self.model.id == record_id, self.model.user_id == user_id
        )
        return session.exec(statement).first()

    def get_by_id(self, record_id: int, *, user_id: int) -> Optional[RecordT]:
        with self.session_factory() as session:
            return self._fetch(session, record_id, user_id)

    def list_all(self, *, user_id: int) -> list[RecordT]:
        with self.session_factory() as session:
            statement = self._ordered(self._select().where(self.model.user_id == user_id))
            return list(session.exec(statement).all())

    # -- writes ----------------------------------------------------------

    def _load_related(self, record: RecordT) -> None:
        """Hook for subclasses to load relationships before the session closes."""

    def _before_delete(self, session: Session, record: RecordT) -> None:
        """Hook for subclasses to detach dependent rows."""

    def create(self, record: RecordT, *, user_id: int) -> RecordT:
        with self.session_factory() as session:
            record.user_id = user_id
            session.add(record)
            session.commit()
            session.refresh(record)
            self._load_related(record)
        logger.info(
            "Record created",
            extra={"resource": self.resource, "record_id": record.id, "user_id": user_id},
        )
        self._publish("created", user_id, record.id)
        return record

    def update(
        self, record_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[RecordT]:
        with self.session_factory() as session:
            record = self._fetch(session, record_id, user_id)
            if record is None:
                return None
            applied = []
            for name, value in changes.items():
                if name in PROTECTED_FIELDS or name not in self.model.model_fields:
                    continue
                setattr(record, name, value)
                applied.append(name)
            record.touch()
            session.add(record)
            session.commit()
            session.refresh(record)
            self._load_related(record)
        logger.info(
            "Record updated",
            extra={
                "resource": self.resource,
                "record_id": record_id,
                "user_id": user_id,
                "fields": sorted(applied),
            },
        )
        self._publish("updated", user_id, record_id)
        return record

    def delete(self, record_id: int, *, user_id: int) -> bool:
        with self.session_factory() as session:
            record = self._fetch(session, record_id, user_id)
            if record is None:
                return False
            self._before_delete(session, record)
            session.delete(record)
        logger.info(
            "Record deleted",
            extra={"resource": self.resource, "record_id": record_id, "user_id": user_id},
        )
        self._publish("deleted", user_id, record_id)
        return True

    def delete_all(self, *, user_id: int, session: Optional[Session] = None) -> int:
        """Delete the user's records in this table and return the count.

        Given a *session* the deletes join its transaction and no event is
        published; the caller commits and notifies.
        """

        if session is not None:
            return self._delete_owned(session, user_id)
        with self.session_factory() as own_session:
            count = self._delete_owned(own_session, user_id)
        if count:
            self._publish("deleted", user_id)
        return count

    def _delete_owned(self, session: Session, user_id: int) -> int:
        records = list(session.exec(self._select().where(self.model.user_id == user_id)).all())
        for record in records:
            self._before_delete(session, record)
            session.delete(record)
        session.flush()
        if records:
            logger.info(
                "Records cleared",
                extra={"resource": self.resource, "count": len(records), "user_id": user_id},
            )
        return len(records)

    def _publish(self, action: str, user_id: int, record_id: Any = None) -> None:
        if self.notifier is None:
            return
        self.notifier.publish(
            ChangeEvent(resource=self.resource, action=action, user_id=user_id, record_id=record_id)
        )
