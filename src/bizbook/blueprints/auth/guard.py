"""Bearer-token guard shared by every protected route."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from flask import current_app, g, request

from ...errors import AuthenticationError
from ...extensions import get_repositories
from ...services.auth import decode_token

ViewFunc = TypeVar("ViewFunc", bound=Callable[..., Any])

_SCHEME = "bearer"


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != _SCHEME or not token.strip():
        raise AuthenticationError("Authentication required")
    return token.strip()


def authenticate_request() -> int:
    """Resolve the bearer token to an active user id and store it on ``g``."""

    config = current_app.config["BIZBOOK_CONFIG"]
    user_id = decode_token(
        _bearer_token(), secret=config.SECRET_KEY, algorithm=config.TOKEN_ALGORITHM
    )
    user = get_repositories().users.get_by_id(user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Invalid token")
    g.user_id = user_id
    return user_id


def current_user_id() -> int:
    user_id = g.get("user_id")
    if user_id is None:
        raise AuthenticationError("Authentication required")
    return user_id


def login_required(view: ViewFunc) -> ViewFunc:
    @wraps(view)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        authenticate_request()
        return view(*args, **kwargs)

    return wrapped  # type: ignore[return-value]
