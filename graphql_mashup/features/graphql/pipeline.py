"""Request pipeline: resolve a document, then execute it.

Per request:

1. The query must be a string, otherwise ``missing-query``.
2. The document cache is consulted. On a miss the query is parsed and
   validated against the composed schema (``malformed-query`` on failure)
   and the valid document is cached.
3. The document is executed with the shared root value, the caller's
   context, variables and operation name. Async resolvers are awaited.
4. Field errors are returned on the ExecutionResult; only an exception from
   the executor itself becomes ``execution-failed``.

The cache lock is held only inside DocumentCache.get/put, so concurrent
requests never wait on another request's parse or execute.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from graphql import GraphQLError
from graphql.pyutils import is_awaitable

from graphql_mashup.core.exceptions import RequestError
from graphql_mashup.features.graphql.caching import DocumentCache
from graphql_mashup.features.graphql.engine import EngineFacade, GraphQLCoreEngine
from graphql_mashup.features.graphql.error_handler import log_errors
from graphql_mashup.infra.logging.context import get_logger
from graphql_mashup.infra.metrics.prometheus import (
    graphql_request_duration_seconds,
    graphql_requests_total,
)
from graphql_mashup.infra.tracing import add_span_attributes, get_tracer

if TYPE_CHECKING:
    from graphql import DocumentNode, ExecutionResult, GraphQLSchema

logger = logging.getLogger(__name__)

__all__ = ["RequestPipeline"]

# Truncate documents attached to spans
MAX_SPAN_DOCUMENT_LENGTH = 2000


class RequestPipeline:
    """Serve requests against one composed, immutable schema.

    Args:
        schema: Composed and validated schema.
        cache: Document cache owned by the same model.
        engine: Engine facade used for parse, validate and execute.
        root_value: Root resolver object shared by every request.
        max_validation_errors: Optional cap passed to query validation.
        tracing_enabled: Open one span per request.
        include_document: Attach the query text to the request span.
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        cache: DocumentCache,
        engine: EngineFacade | None = None,
        root_value: Any = None,
        *,
        max_validation_errors: int | None = None,
        tracing_enabled: bool = True,
        include_document: bool = False,
    ) -> None:
        self.schema = schema
        self.cache = cache
        self.engine = engine or GraphQLCoreEngine()
        self.root_value = root_value
        self.max_validation_errors = max_validation_errors
        self.tracing_enabled = tracing_enabled
        self.include_document = include_document
        self._tracer = get_tracer()

    async def handle(
        self,
        context: Any,
        query: Any,
        variables: Mapping[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> ExecutionResult:
        """Resolve and execute one request.

        Raises:
            RequestError: For a missing or malformed query, or when the
                executor itself raises.
        """
        start = time.perf_counter()
        status = "error"
        try:
            if self.tracing_enabled:
                with self._tracer.start_as_current_span("graphql.request"):
                    result = await self._handle(context, query, variables, operation_name)
            else:
                result = await self._handle(context, query, variables, operation_name)
            status = "partial" if result.errors else "success"
            return result
        finally:
            graphql_requests_total.labels(status=status).inc()
            graphql_request_duration_seconds.observe(time.perf_counter() - start)

    async def _handle(
        self,
        context: Any,
        query: Any,
        variables: Mapping[str, Any] | None,
        operation_name: str | None,
    ) -> ExecutionResult:
        request_logger = get_logger(__name__, operation_name=operation_name)

        if not isinstance(query, str):
            raise RequestError("Missing GraphQL query", type=RequestError.MISSING_QUERY)

        self._annotate({"graphql.operation.name": operation_name})
        if self.include_document:
            self._annotate({"graphql.document": query[:MAX_SPAN_DOCUMENT_LENGTH]})

        document = self.cache.get(query)
        self._annotate({"graphql.document.cached": document is not None})
        if document is None:
            document = self._resolve_document(query, operation_name)
            self.cache.put(query, document)
        else:
            request_logger.debug("Using cached GraphQL document")

        try:
            result = self.engine.execute(
                self.schema,
                document,
                root_value=self.root_value,
                context_value=context,
                variable_values=variables,
                operation_name=operation_name,
            )
            if is_awaitable(result):
                result = await result
        except Exception as exc:
            request_logger.exception("GraphQL executor failed")
            raise RequestError(
                str(exc) or type(exc).__name__,
                errors=[exc],
                type=RequestError.EXECUTION_FAILED,
            ) from exc

        if result.errors:
            self._annotate({"graphql.error.count": len(result.errors)})
            log_errors(result.errors, operation_name)
        return result

    def _annotate(self, attributes: dict[str, Any]) -> None:
        # Without our own span the current span belongs to the caller
        if self.tracing_enabled:
            add_span_attributes(attributes)

    def _resolve_document(self, query: str, operation_name: str | None) -> DocumentNode:
        try:
            document = self.engine.parse(query)
        except GraphQLError as exc:
            log_errors([exc], operation_name)
            raise RequestError(exc.message, errors=[exc], type=RequestError.MALFORMED_QUERY) from exc
        except RecursionError as exc:
            error = RequestError(
                "GraphQL query is nested too deeply",
                errors=[exc],
                type=RequestError.MALFORMED_QUERY,
            )
            log_errors([error], operation_name)
            raise error from exc

        errors = self.engine.validate(self.schema, document, max_errors=self.max_validation_errors)
        if errors:
            log_errors(errors, operation_name)
            raise RequestError("Invalid GraphQL query", errors=errors, type=RequestError.MALFORMED_QUERY)
        return document
