"""OpenTelemetry tracing infrastructure.

- get_tracer(): Get a tracer for creating custom spans
- add_span_attributes(): Add attributes to current span
"""

from graphql_mashup.infra.tracing.opentelemetry import (
    add_span_attributes,
    get_tracer,
)

__all__ = [
    "add_span_attributes",
    "get_tracer",
]
