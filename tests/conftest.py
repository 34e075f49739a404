"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolated, cache-cleared settings
    - Engine Fixtures: graphql-core engine with call counters
    - Schema Fixtures: reusable schema text and fragments
"""

from __future__ import annotations

import os
from collections import Counter
from collections.abc import Iterator

import pytest

from graphql_mashup.core.settings import clear_all_caches
from graphql_mashup.features.graphql.engine import GraphQLCoreEngine
from graphql_mashup.features.graphql.fragments import Fragment

# Keep tests independent of local configuration files
os.environ.setdefault("GRAPHQL_CONFIG_DIR", "/nonexistent-graphql-conf")
os.environ.setdefault("LOGGING_CONFIG_DIR", "/nonexistent-logging-conf")


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_caches() -> Iterator[None]:
    """Reload settings for every test so env overrides never leak."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Engine Fixtures
# ============================================================================


class CountingEngine(GraphQLCoreEngine):
    """graphql-core engine that counts parse/validate/execute calls."""

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()

    def parse(self, source):
        self.calls["parse"] += 1
        return super().parse(source)

    def validate(self, schema, document, max_errors=None):
        self.calls["validate"] += 1
        return super().validate(schema, document, max_errors=max_errors)

    def execute(self, schema, document, *args, **kwargs):
        self.calls["execute"] += 1
        return super().execute(schema, document, *args, **kwargs)

    def extend_schema(self, schema, document):
        self.calls["extend_schema"] += 1
        return super().extend_schema(schema, document)


@pytest.fixture
def counting_engine() -> CountingEngine:
    """Engine facade with call counters for cache behavior assertions."""
    return CountingEngine()


# ============================================================================
# Schema Fixtures
# ============================================================================


PING_SCHEMA = "type Query { ping: String }"


@pytest.fixture
def ping_schema() -> str:
    return PING_SCHEMA


@pytest.fixture
def ping_root() -> dict:
    return {"ping": lambda info: "pong"}


@pytest.fixture
def users_fragment() -> Fragment:
    """Fragment adding a User type, resolved by its own populate hook."""

    users = {"1": {"id": "1", "name": "Ada"}, "2": {"id": "2", "name": "Grace"}}

    def populate(schema, engine):
        engine.set_resolver(schema, "Query", "user", lambda _root, _info, id: users.get(id))

    return Fragment(
        schema="""
        type User {
          id: ID!
          name: String
        }

        extend type Query {
          user(id: ID!): User
        }
        """,
        populate=populate,
    )
