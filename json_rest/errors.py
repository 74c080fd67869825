"""Exceptions, the nil-error sentinel and structured JSON errors."""

from __future__ import annotations

import json


class NilError(Exception):
    """Raised in place of an error that was never supplied."""


# Substituted by ``error()`` when it is called without an error.
ERR_IS_NIL = NilError("error is nil")


class SerializationError(ValueError):
    """A value could not be represented as JSON."""


class APIError(Exception):
    """Base exception for errors that carry their own HTTP status.

    ``str()`` of an APIError is already a JSON document, so the error writer
    sends it through untouched instead of wrapping it in a JSON string.
    """

    def __init__(self, status_code: int = 500, message: str = "Internal Server Error"):
        self.status_code = status_code
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": {
                "code": self.status_code,
                "message": self.message,
            },
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


class BadRequest(APIError):
    """400 — malformed or missing parameters."""

    def __init__(self, message: str = "Bad Request"):
        super().__init__(400, message)


class Unauthorized(APIError):
    """401 — missing or invalid credentials."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(401, message)


class Forbidden(APIError):
    """403"""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(403, message)


class NotFound(APIError):
    """404 — nothing lives at this path."""

    def __init__(self, message: str = "Not Found"):
        super().__init__(404, message)


class MethodNotAllowed(APIError):
    """405 — HTTP method not supported for this path."""

    def __init__(self, allowed: list[str] | None = None):
        self.allowed = allowed or []
        msg = "Method Not Allowed"
        if self.allowed:
            msg += f". Allowed: {', '.join(self.allowed)}"
        super().__init__(405, msg)


class InternalServerError(APIError):
    """500 — the handler failed in a way the client cannot fix."""

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(500, message)
