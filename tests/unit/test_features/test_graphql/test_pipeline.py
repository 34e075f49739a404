"""Tests for the request pipeline."""

from __future__ import annotations

import asyncio

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from graphql_mashup.core.exceptions import RequestError
from graphql_mashup.features.graphql.caching import DocumentCache
from graphql_mashup.features.graphql.pipeline import RequestPipeline
from graphql_mashup.features.graphql.schema_composer import compose_schema

SCHEMA = """
type Query {
  ping: String
  echo(text: String!): String
  boom: String
  slow(delay: Float!): String
  viewer: String
}
"""


class Root:
    """Root value with sync and async resolvers."""

    def ping(self, info):
        return "pong"

    def echo(self, info, text):
        return text

    def boom(self, info):
        raise ValueError("resolver exploded")

    async def slow(self, info, delay):
        await asyncio.sleep(delay)
        return f"slept {delay}"

    def viewer(self, info):
        return info.context["user"]


@pytest.fixture
def pipeline(counting_engine) -> RequestPipeline:
    schema = compose_schema(SCHEMA, engine=counting_engine)
    counting_engine.calls.clear()
    return RequestPipeline(schema, DocumentCache(10), counting_engine, root_value=Root())


@pytest.mark.unit
class TestRequestPipeline:
    """Test suite for RequestPipeline.handle."""

    async def test_executes_query(self, pipeline):
        result = await pipeline.handle(None, "{ ping }")

        assert result.data == {"ping": "pong"}
        assert result.errors is None

    @pytest.mark.parametrize("query", [None, 123, b"{ ping }", {"query": "{ ping }"}])
    async def test_non_string_query_is_rejected_before_engine(self, pipeline, counting_engine, query):
        with pytest.raises(RequestError) as exc_info:
            await pipeline.handle(None, query, {}, None)

        assert exc_info.value.type == RequestError.MISSING_QUERY
        assert exc_info.value.message == "Missing GraphQL query"
        assert sum(counting_engine.calls.values()) == 0

    async def test_syntax_error_is_malformed_query(self, pipeline):
        with pytest.raises(RequestError) as exc_info:
            await pipeline.handle(None, "{ ping ")

        error = exc_info.value
        assert error.type == RequestError.MALFORMED_QUERY
        assert error.message.startswith("Syntax Error")
        assert error.details[0]["locations"] == [{"line": 1, "column": 8}]
        assert len(pipeline.cache) == 0

    async def test_validation_error_is_malformed_query(self, pipeline):
        with pytest.raises(RequestError) as exc_info:
            await pipeline.handle(None, "{ ping nope }")

        error = exc_info.value
        assert error.type == RequestError.MALFORMED_QUERY
        assert error.message == "Invalid GraphQL query"
        assert "nope" in error.details[0]["message"]
        assert len(pipeline.cache) == 0

    async def test_second_request_skips_parse_and_validate(self, pipeline, counting_engine):
        first = await pipeline.handle(None, "{ ping }")
        second = await pipeline.handle(None, "{ ping }")

        assert first.data == second.data == {"ping": "pong"}
        assert counting_engine.calls["parse"] == 1
        assert counting_engine.calls["validate"] == 1
        assert counting_engine.calls["execute"] == 2

    async def test_failed_request_leaves_pipeline_usable(self, pipeline):
        with pytest.raises(RequestError):
            await pipeline.handle(None, "{ nope }")

        result = await pipeline.handle(None, "{ ping }")
        assert result.data == {"ping": "pong"}

    async def test_field_errors_are_returned_as_data(self, pipeline):
        result = await pipeline.handle(None, "{ ping boom }")

        assert result.data == {"ping": "pong", "boom": None}
        assert len(result.errors) == 1
        assert result.errors[0].message == "resolver exploded"
        assert result.errors[0].path == ["boom"]

    async def test_variables_and_operation_name(self, pipeline):
        query = """
        query First { ping }
        query Second($text: String!) { echo(text: $text) }
        """

        result = await pipeline.handle(None, query, {"text": "hi"}, "Second")

        assert result.data == {"echo": "hi"}

    async def test_unknown_operation_name_is_a_result_error(self, pipeline):
        result = await pipeline.handle(None, "query A { ping }", None, "B")

        assert result.data is None
        assert "Unknown operation named 'B'" in result.errors[0].message

    async def test_context_is_passed_through(self, pipeline):
        context = {"user": "ada"}

        result = await pipeline.handle(context, "{ viewer }")

        assert result.data == {"viewer": "ada"}

    async def test_async_resolvers_are_awaited(self, pipeline):
        result = await pipeline.handle(None, "{ slow(delay: 0) }")

        assert result.data == {"slow": "slept 0.0"}

    async def test_concurrent_requests_interleave(self, pipeline, counting_engine):
        queries = [f"{{ slow(delay: 0.01) ping a{i}: echo(text: \"{i}\") }}" for i in range(5)]

        results = await asyncio.gather(*(pipeline.handle(None, q) for q in queries * 2))

        assert [r.data[f"a{i % 5}"] for i, r in enumerate(results)] == [str(i % 5) for i in range(10)]
        assert len(pipeline.cache) == 5

    async def test_executor_exception_is_execution_failed(self, pipeline, counting_engine):
        def broken_execute(*args, **kwargs):
            raise RuntimeError("executor crashed")

        counting_engine.execute = broken_execute

        with pytest.raises(RequestError) as exc_info:
            await pipeline.handle(None, "{ ping }")

        assert exc_info.value.type == RequestError.EXECUTION_FAILED
        assert exc_info.value.message == "executor crashed"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    async def test_max_validation_errors_is_forwarded(self, counting_engine):
        schema = compose_schema(SCHEMA)
        pipeline = RequestPipeline(
            schema,
            DocumentCache(2),
            counting_engine,
            root_value=Root(),
            max_validation_errors=1,
        )

        with pytest.raises(RequestError) as exc_info:
            await pipeline.handle(None, "{ a b c }")

        # graphql-core appends a "Too many validation errors" entry at the cap
        assert len(exc_info.value.details) == 2

    async def test_tracing_disabled(self, counting_engine):
        pipeline = RequestPipeline(
            compose_schema(SCHEMA),
            DocumentCache(2),
            counting_engine,
            root_value=Root(),
            tracing_enabled=False,
        )

        result = await pipeline.handle(None, "{ ping }")

        assert result.data == {"ping": "pong"}

    async def test_deeply_nested_query_is_malformed_query(self, counting_engine):
        schema = compose_schema("type Query { a: Query b: Int }")
        pipeline = RequestPipeline(schema, DocumentCache(2), counting_engine)
        query = "{ " + "a { " * 5000 + "b" + " }" * 5001

        with pytest.raises(RequestError) as exc_info:
            await pipeline.handle(None, query)

        assert exc_info.value.type == RequestError.MALFORMED_QUERY
        assert isinstance(exc_info.value.__cause__, RecursionError)
        assert len(pipeline.cache) == 0
        assert (await pipeline.handle(None, "{ b }")).errors is None


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider.get_tracer("tests")


@pytest.mark.unit
class TestRequestSpans:
    """Test suite for request span recording."""

    async def test_failure_is_recorded_once(self, pipeline, tracer, span_exporter):
        pipeline._tracer = tracer

        with pytest.raises(RequestError):
            await pipeline.handle(None, "{ ping nope }")

        (span,) = span_exporter.get_finished_spans()
        assert span.name == "graphql.request"
        assert [event.name for event in span.events] == ["exception"]
        assert span.status.status_code == StatusCode.ERROR

    async def test_request_attributes(self, pipeline, tracer, span_exporter):
        pipeline._tracer = tracer

        await pipeline.handle(None, "query Ping { ping }", operation_name="Ping")

        (span,) = span_exporter.get_finished_spans()
        assert span.attributes["graphql.operation.name"] == "Ping"
        assert span.attributes["graphql.document.cached"] is False
        assert "graphql.document" not in span.attributes

    async def test_disabled_tracing_leaves_caller_span_alone(self, counting_engine, tracer, span_exporter):
        pipeline = RequestPipeline(
            compose_schema(SCHEMA),
            DocumentCache(2),
            counting_engine,
            root_value=Root(),
            tracing_enabled=False,
        )

        with tracer.start_as_current_span("caller"):
            await pipeline.handle(None, "{ boom }", operation_name=None)

        (span,) = span_exporter.get_finished_spans()
        assert span.name == "caller"
        assert not any(key.startswith("graphql.") for key in span.attributes)
