"""User model backing token authentication."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .base import utcnow


class User(SQLModel, table=True):
    """Account that owns every financial record."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    last_login: Optional[datetime] = Field(default=None)

    def public_dict(self) -> dict:
        """Serializable view without the password hash."""

        return self.model_dump(mode="json", exclude={"password_hash"})
