"""Blueprint exports."""

from . import api, auth

__all__ = ["api", "auth"]
