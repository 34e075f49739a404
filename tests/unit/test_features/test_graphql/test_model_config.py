"""Tests for GraphQL model construction options."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from graphql_mashup.features.graphql.config import DEFAULT_SCHEMA, ModelConfig
from graphql_mashup.features.graphql.fragments import Fragment


@pytest.mark.unit
class TestModelConfig:
    """Test suite for ModelConfig."""

    def test_defaults(self):
        config = ModelConfig()

        assert config.schema_sdl == DEFAULT_SCHEMA
        assert config.root == {}
        assert config.extensions == ()
        assert config.dependencies == ()
        assert config.cache_size == 100

    def test_schema_alias_and_field_name(self):
        assert ModelConfig(schema="type Query { a: Int }").schema_sdl == "type Query { a: Int }"
        assert ModelConfig(schema_sdl="type Query { a: Int }").schema_sdl == "type Query { a: Int }"

    def test_cache_size_aliases(self):
        assert ModelConfig(cacheSize=5).cache_size == 5
        assert ModelConfig(cache_size=6).cache_size == 6

    @pytest.mark.parametrize("size", [0, -1])
    def test_cache_size_must_be_positive(self, size):
        with pytest.raises(ValidationError):
            ModelConfig(cache_size=size)

    def test_empty_schema_is_rejected(self):
        with pytest.raises(ValidationError):
            ModelConfig(schema="")

    def test_unknown_option_is_rejected(self):
        with pytest.raises(ValidationError):
            ModelConfig(fragments=[])

    def test_root_accepts_any_object(self):
        class Root:
            pass

        root = Root()
        assert ModelConfig(root=root).root is root

    def test_fragment_lists_become_tuples(self):
        fragment = Fragment(schema="extend type Query { a: Int }")

        config = ModelConfig(extensions=[fragment], dependencies=(fragment,))

        assert config.extensions == (fragment,)
        assert config.dependencies == (fragment,)

    def test_none_fragments_become_empty(self):
        assert ModelConfig(extensions=None).extensions == ()

    @pytest.mark.parametrize(
        "value",
        [
            "extend type Query { a: Int }",
            Fragment(schema="extend type Query { a: Int }"),
            [{"schema": "extend type Query { a: Int }"}],
        ],
    )
    def test_invalid_fragments_are_rejected(self, value):
        with pytest.raises(ValidationError):
            ModelConfig(extensions=value)

    def test_fragments_order_dependencies_first(self):
        dependency = Fragment(schema="scalar Date")
        extension = Fragment(schema="extend type Query { today: Date }")

        config = ModelConfig(extensions=[extension], dependencies=[dependency])

        assert config.fragments == (dependency, extension)

    def test_frozen(self):
        config = ModelConfig()

        with pytest.raises(ValidationError):
            config.cache_size = 10
