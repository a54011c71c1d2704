"""Registration, login and identity routes."""

from __future__ import annotations

from flask import current_app, jsonify, request

from ...errors import AuthenticationError, ValidationError
from ...extensions import get_repositories
from ...logging_config import get_logger
from ...services import auth as auth_service
from . import bp
from .guard import current_user_id, login_required

logger = get_logger(__name__)


def _credentials() -> tuple[str, str, str | None]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Expected a JSON object.")
    username = payload.get("username")
    password = payload.get("password")
    email = payload.get("email")
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError(
            errors={
                name: ["This field is required."]
                for name, value in (("username", username), ("password", password))
                if not isinstance(value, str)
            }
        )
    return username, password, email if isinstance(email, str) else None


def _token_payload(user) -> dict:
    config = current_app.config["BIZBOOK_CONFIG"]
    token = auth_service.issue_token(
        user,
        secret=config.SECRET_KEY,
        ttl_minutes=config.TOKEN_TTL_MINUTES,
        algorithm=config.TOKEN_ALGORITHM,
    )
    return {
        "token": token,
        "token_type": "Bearer",
        "expires_in": config.TOKEN_TTL_MINUTES * 60,
        "user": user.public_dict(),
    }


@bp.post("/register")
def register():
    username, password, email = _credentials()
    user = auth_service.create_user(
        username=username, password=password, email=email, users=get_repositories().users
    )
    return jsonify({"success": True, "data": _token_payload(user)}), 201


@bp.post("/login")
def login():
    username, password, _ = _credentials()
    user = auth_service.authenticate(
        username=username, password=password, users=get_repositories().users
    )
    if user is None:
        raise AuthenticationError("Invalid username or password")
    logger.info("User logged in", extra={"user_id": user.id})
    return jsonify({"success": True, "data": _token_payload(user)})


@bp.get("/me")
@login_required
def me():
    user = get_repositories().users.get_by_id(current_user_id())
    return jsonify({"success": True, "data": user.public_dict()})
