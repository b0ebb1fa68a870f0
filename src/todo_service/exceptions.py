"""
Error types raised by the store and the request handlers.

Each exception carries the HTTP status it maps to, so the application's
exception handlers can turn any of them into the failure envelope
({"code": -1, "message": ...}) without knowing the concrete type.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .utils import error_envelope


class TodoServiceError(Exception):
    """Base exception for all todo service errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the failure response envelope."""
        return error_envelope(self.message)


class ValidationError(TodoServiceError):
    """Raised when input is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidTodoIdError(ValidationError):
    """Raised when a path id cannot be parsed as an integer."""

    def __init__(self, raw_id: str) -> None:
        super().__init__(f"todo id:{raw_id} is not a number", field="id")
        self.raw_id = raw_id


class TodoNotFoundError(TodoServiceError):
    """Raised by handlers when no todo matches the requested id."""

    status_code = 404

    def __init__(self, raw_id: Any) -> None:
        super().__init__(f"todo id:{raw_id} not found")


class InternalError(TodoServiceError):
    status_code = 500

    def __init__(self, message: str = "internal server error") -> None:
        super().__init__(message)
