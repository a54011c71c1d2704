"""SQLModel implementation of the user repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlmodel import select

from ...models import User
from ..database import SessionFactory


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self.session_factory() as session:
            return session.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        with self.session_factory() as session:
            return session.exec(select(User).where(User.username == username.strip())).first()

    def create(self, user: User) -> User:
        with self.session_factory() as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def update(self, user_id: int, changes: Mapping[str, Any]) -> Optional[User]:
        with self.session_factory() as session:
            user = session.get(User, user_id)
            if user is None:
                return None
            for name, value in changes.items():
                if name != "id" and name in User.model_fields:
                    setattr(user, name, value)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
