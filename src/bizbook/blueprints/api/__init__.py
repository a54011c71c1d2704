"""JSON API blueprint package."""

from __future__ import annotations

from flask import Blueprint, request

from ..auth.guard import authenticate_request

bp = Blueprint("api", __name__, url_prefix="/api")

PUBLIC_ENDPOINTS = frozenset({"api.index"})


@bp.before_request
def _require_token() -> None:
    if request.endpoint in PUBLIC_ENDPOINTS or request.method == "OPTIONS":
        return
    authenticate_request()


from . import calculations, resources  # noqa: E402,F401

__all__ = ["bp"]
