"""OpenTelemetry span helpers.

Only the OpenTelemetry API is used here. Spans are no-ops until the host
process installs an SDK tracer provider.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

TRACER_NAME = "graphql_mashup"


def get_tracer(name: str = TRACER_NAME) -> trace.Tracer:
    """Get a tracer instance for creating custom spans.

    Args:
        name: Tracer name.

    Returns:
        Tracer instance for creating spans.

    Example:
        tracer = get_tracer()

        with tracer.start_as_current_span("graphql.compose") as span:
            span.set_attribute("graphql.fragments", 3)
    """
    return trace.get_tracer(name)


def add_span_attributes(attributes: dict[str, Any]) -> None:
    """Add attributes to the current span.

    ``None`` values are skipped since OpenTelemetry rejects them.
    """
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, value)
