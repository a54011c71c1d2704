"""Authentication blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("auth", __name__, url_prefix="/api/auth")

from . import routes  # noqa: E402,F401
from .guard import authenticate_request, current_user_id, login_required  # noqa: E402

__all__ = ["authenticate_request", "bp", "current_user_id", "login_required"]
