"""Authentication and bearer token services."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..domain.repositories import UserRepository
from ..errors import AuthenticationError, ConflictError, ValidationError
from ..logging_config import get_logger
from ..models import User

logger = get_logger(__name__)

_hasher = PasswordHasher()

MIN_PASSWORD_LENGTH = 8
MAX_USERNAME_LENGTH = 64


def _validate_credentials(username: str, password: str) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    if not username:
        errors.setdefault("username", []).append("This field is required.")
    elif len(username) > MAX_USERNAME_LENGTH:
        errors.setdefault("username", []).append(
            f"Username must be at most {MAX_USERNAME_LENGTH} characters."
        )
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors.setdefault("password", []).append(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )
    return errors


def create_user(
    *,
    username: str,
    password: str,
    email: Optional[str] = None,
    users: UserRepository,
) -> User:
    """Create a new user with hashed password."""

    username = (username or "").strip()
    errors = _validate_credentials(username, password)
    if errors:
        raise ValidationError(errors=errors)
    if users.get_by_username(username) is not None:
        raise ConflictError("Username already exists")
    user = users.create(
        User(username=username, email=email, password_hash=_hasher.hash(password))
    )
    logger.info("User created", extra={"user_id": user.id, "username": username})
    return user


def authenticate(*, username: str, password: str, users: UserRepository) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = (username or "").strip()
    if not username:
        return None
    user = users.get_by_username(username)
    if user is None or not user.is_active:
        return None
    try:
        _hasher.verify(user.password_hash, password or "")
    except (VerifyMismatchError, InvalidHash, VerificationError):
        logger.warning("Failed login", extra={"username": username})
        return None
    return users.update(user.id, {"last_login": datetime.now(timezone.utc)}) or user


def issue_token(
    user: User,
    *,
    secret: str,
    ttl_minutes: int,
    algorithm: str = "HS256",
    now: Optional[datetime] = None,
) -> str:
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "iat": issued,
        "exp": issued + timedelta(minutes=ttl_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, *, secret: str, algorithm: str = "HS256") -> int:
    """Return the user id carried by *token* or raise :class:`AuthenticationError`."""

    try:
        payload: dict[str, Any] = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid token") from exc
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid token") from exc


__all__ = ["authenticate", "create_user", "decode_token", "issue_token"]
