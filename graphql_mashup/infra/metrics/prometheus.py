"""Prometheus metrics for schema composition and request handling."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Custom registry so embedding hosts decide whether to expose these metrics
REGISTRY = CollectorRegistry()

# Covers request latencies from 1ms to 10s
DEFAULT_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)

# Request metrics
graphql_requests_total = Counter(
    "graphql_requests_total",
    "Total GraphQL requests handled by the request pipeline",
    ["status"],
    registry=REGISTRY,
)

graphql_request_duration_seconds = Histogram(
    "graphql_request_duration_seconds",
    "GraphQL request duration in seconds (parse, validate and execute)",
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

# Parsed document cache metrics
graphql_document_cache_total = Counter(
    "graphql_document_cache_total",
    "Parsed document cache lookups",
    ["result"],
    registry=REGISTRY,
)

graphql_document_cache_evictions_total = Counter(
    "graphql_document_cache_evictions_total",
    "Parsed documents evicted from the cache",
    registry=REGISTRY,
)

# Schema composition metrics
graphql_schema_compositions_total = Counter(
    "graphql_schema_compositions_total",
    "Schema compositions attempted",
    ["status"],
    registry=REGISTRY,
)

graphql_schema_composition_duration_seconds = Histogram(
    "graphql_schema_composition_duration_seconds",
    "Time spent composing and validating a schema",
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)
