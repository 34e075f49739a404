"""Custom exception classes for schema composition and request handling."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from graphql import GraphQLError


def format_error_detail(error: BaseException | dict[str, Any] | str) -> dict[str, Any]:
    """Format one diagnostic into the public error detail shape.

    Args:
        error: A GraphQLError, any other exception, an already formatted
            dict, or a bare message.

    Returns:
        Dict with ``message`` and, when known, ``locations`` and ``path``.
    """
    if isinstance(error, GraphQLError):
        formatted = error.formatted
        detail: dict[str, Any] = {"message": formatted["message"]}
        if formatted.get("locations"):
            detail["locations"] = formatted["locations"]
        if formatted.get("path"):
            detail["path"] = formatted["path"]
        return detail
    if isinstance(error, dict):
        return {"message": str(error.get("message", "")), **error}
    return {"message": str(error)}


class GraphQLModelError(Exception):
    """Base exception for every failure raised by a GraphQL model.

    Attributes:
        message: Human-readable summary of the failure.
        type: Error type identifier (e.g. ``"malformed-query"``).
        details: Diagnostics, each a dict with at least ``message``.
        errors: The original diagnostic objects, unformatted.
        extra: Additional context-specific information about the error.

    Example:
        raise GraphQLModelError(
            "Invalid GraphQL query",
            errors=validation_errors,
            type="malformed-query",
        )
    """

    default_type = "about:blank"

    def __init__(
        self,
        message: str,
        errors: Iterable[BaseException | dict[str, Any] | str] | None = None,
        type: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize model exception.

        Args:
            message: Human-readable error message.
            errors: Underlying diagnostics (syntax/validation errors).
            type: Error type identifier.
            extra: Additional context about the error.
        """
        self.message = message
        self.errors = list(errors or [])
        self.details = [format_error_detail(error) for error in self.errors]
        self.type = type or self.default_type
        self.extra = extra or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return the normalized error shape."""
        return {
            "message": self.message,
            "type": self.type,
            "details": self.details,
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        lines = "\n".join(f"  - {detail['message']}" for detail in self.details)
        return f"{self.message}:\n{lines}"


class SchemaCompositionError(GraphQLModelError):
    """Raised when fragments cannot be composed into a valid schema.

    Carries every collected diagnostic so all issues can be fixed in one pass.

    Example:
        raise SchemaCompositionError("Invalid GraphQL schema", errors=errors)
    """

    default_type = "schema-composition"


class RequestError(GraphQLModelError):
    """Raised when a single request cannot be served.

    The ``type`` attribute distinguishes caller misuse (``missing-query``),
    parse or validation failures (``malformed-query``) and unexpected
    executor failures (``execution-failed``).
    """

    MISSING_QUERY = "missing-query"
    MALFORMED_QUERY = "malformed-query"
    EXECUTION_FAILED = "execution-failed"
    FIELD_ERRORS = "field-errors"

    default_type = MALFORMED_QUERY


# Short alias matching the name exported by the public factory module
ModelError = GraphQLModelError

__all__ = [
    "GraphQLModelError",
    "ModelError",
    "RequestError",
    "SchemaCompositionError",
    "format_error_detail",
]
