"""Generic user-scoped record repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, TypeVar

RecordT = TypeVar("RecordT")


class RecordRepository(Protocol[RecordT]):
    """CRUD over one user-owned table."""

    resource: str

    def get_by_id(self, record_id: int, *, user_id: int) -> Optional[RecordT]:
        """Retrieve a record owned by *user_id*."""
        ...

    def list_all(self, *, user_id: int) -> list[RecordT]:
        """List the user's records."""
        ...

    def create(self, record: RecordT, *, user_id: int) -> RecordT:
        """Persist a new record for *user_id*."""
        ...

    def update(
        self, record_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[RecordT]:
        """Apply *changes*; ``None`` when the record does not exist."""
        ...

    def delete(self, record_id: int, *, user_id: int) -> bool:
        """Delete a record; ``False`` when it does not exist."""
        ...

    def delete_all(self, *, user_id: int, session: Any = None) -> int:
        """Delete every record the user owns in this table; returns the count.

        With *session* the deletes join that transaction and publish nothing.
        """
        ...
