"""GraphQL error normalization and logging.

Every failure leaves the model in one shape::

    {"message": str, "type": str, "details": [{"message": str, "locations": [...]}]}

Field errors produced during execution are not failures: they stay on the
ExecutionResult. Integrations that want them treated as failures call
raise_for_field_errors() explicitly.

Usage:
    result = await model.request(context, query)
    raise_for_field_errors(result)  # opt-in strict semantics
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from graphql import GraphQLError

from graphql_mashup.core.exceptions import GraphQLModelError, RequestError, format_error_detail

if TYPE_CHECKING:
    from graphql import ExecutionResult

logger = logging.getLogger(__name__)

__all__ = [
    "format_error_details",
    "is_user_facing_error",
    "log_errors",
    "raise_for_field_errors",
    "to_error_response",
]


def format_error_details(errors: Iterable[BaseException | dict[str, Any] | str]) -> list[dict[str, Any]]:
    """Format diagnostics into ``{"message", "locations"?, "path"?}`` dicts."""
    return [format_error_detail(error) for error in errors]


def is_user_facing_error(error: BaseException) -> bool:
    """Determine if an error was caused by the caller rather than the server.

    Syntax and validation errors carry no original exception; resolver
    failures wrap the exception that was raised.
    """
    if isinstance(error, RequestError):
        return error.type != RequestError.EXECUTION_FAILED
    if isinstance(error, GraphQLError):
        return error.original_error is None
    return False


def log_errors(
    errors: Iterable[BaseException],
    operation_name: str | None = None,
) -> None:
    """Log errors with full details for server-side debugging.

    User-facing errors are expected and logged at INFO; anything else at ERROR.
    """
    for error in errors:
        log_context: dict[str, Any] = {"error_message": str(error)}
        if operation_name:
            log_context["operation_name"] = operation_name
        if isinstance(error, GraphQLError):
            log_context["error_path"] = error.path
            if error.original_error is not None:
                log_context["exception_type"] = type(error.original_error).__name__

        if is_user_facing_error(error):
            logger.info("GraphQL user-facing error", extra=log_context)
        else:
            logger.error("GraphQL internal error", extra=log_context)


def raise_for_field_errors(result: ExecutionResult) -> ExecutionResult:
    """Raise RequestError when an execution result carries field errors.

    Args:
        result: Result returned by ``GraphQLModel.request``.

    Returns:
        The same result when it has no errors.

    Raises:
        RequestError: With ``type="field-errors"`` and one detail per error.
    """
    if result.errors:
        raise RequestError(
            "GraphQL execution returned errors",
            errors=result.errors,
            type=RequestError.FIELD_ERRORS,
            extra={"data": result.data},
        )
    return result


def to_error_response(error: GraphQLModelError) -> dict[str, Any]:
    """Render a model error as a GraphQL-style response payload.

    Transports can return this directly, e.g. as the JSON body of a 400.
    """
    errors = error.details or [{"message": error.message}]
    return {
        "data": None,
        "errors": [
            {**detail, "extensions": {"code": error.type}} for detail in errors
        ],
    }
