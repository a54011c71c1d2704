"""Application exception hierarchy and JSON error handlers."""

from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .logging_config import get_logger

logger = get_logger(__name__)


class BizBookError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": False, "error": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(BizBookError):
    """Raised when a request payload fails validation."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Invalid data",
        *,
        errors: Mapping[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, details=errors)
        self.errors = dict(errors or {})


class InvalidAmountError(ValidationError):
    """A monetary or rate input is missing, non-numeric, non-finite or negative."""

    code = "INVALID_AMOUNT"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, errors={field: [message]})
        self.field = field


class AuthenticationError(BizBookError):
    status_code = 401
    code = "AUTHENTICATION_ERROR"


class NotFoundError(BizBookError):
    """Raised when a user-scoped record does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str, record_id: Any | None = None) -> None:
        label = resource.replace("_", " ").capitalize()
        message = f"{label} not found"
        super().__init__(message, details={"id": record_id} if record_id is not None else None)
        self.resource = resource
        self.record_id = record_id


class ConflictError(BizBookError):
    status_code = 409
    code = "CONFLICT"


def register_error_handlers(app: Flask) -> None:
    """Render application and HTTP errors under ``/api`` as JSON."""

    @app.errorhandler(BizBookError)
    def _handle_app_error(exc: BizBookError):
        logger.warning(
            "Request failed",
            extra={
                "error_code": exc.code,
                "status_code": exc.status_code,
                "path": request.path,
                "method": request.method,
            },
        )
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        if not request.path.startswith("/api"):
            return exc
        payload = {
            "success": False,
            "error": exc.description or exc.name,
            "code": exc.name.upper().replace(" ", "_"),
        }
        return jsonify(payload), exc.code or 500

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception(
            "Unhandled error", extra={"path": request.path, "method": request.method}
        )
        payload = {"success": False, "error": "Internal Server Error", "code": "INTERNAL_ERROR"}
        return jsonify(payload), 500
