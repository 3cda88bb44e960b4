"""Exception hierarchy for Eventra.

Services raise these; the web layer turns them into JSON error responses via
``to_dict()`` and ``status_code``.
"""

from __future__ import annotations

from typing import Any


class EventraError(Exception):
    error_code: str = "EVENTRA_ERROR"
    status_code: int = 500

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class NotFoundError(EventraError):
    """Raised when a record does not exist or belongs to another user."""

    error_code = "NOT_FOUND"
    status_code = 404

    def __init__(self, kind: str, identifier: int | str) -> None:
        super().__init__(
            f"{kind.capitalize()} not found: {identifier}",
            context={"kind": kind, "id": str(identifier)},
        )


class MalformedRecordError(EventraError, ValueError):
    """Raised when a stored record cannot be normalized into its typed schema."""

    error_code = "MALFORMED_RECORD"
    status_code = 422

    def __init__(self, field: str, value: Any, reason: str = "") -> None:
        message = f"Malformed value for '{field}': {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, context={"field": field})


class InvalidInputError(EventraError, ValueError):
    """Raised when user input is rejected before reaching the core."""

    error_code = "INVALID_INPUT"
    status_code = 400
