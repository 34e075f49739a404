"""Construction options for a GraphQL model.

Usage:
    config = ModelConfig(
        schema="type Query { ping: String }",
        root={"ping": lambda info: "pong"},
        extensions=[users_fragment],
        cache_size=500,
    )

Recognized options:
    schema        Base schema text (default: empty Query/Mutation roots)
    root          Root value passed to every execution (default: {})
    extensions    Fragments whose nested extensions compose after hooks run
    dependencies  Fragments merged before extensions in the first level
    cache_size    Parsed document cache capacity (default: GRAPHQL_CACHE_SIZE or 100)
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PositiveInt, field_validator

from graphql_mashup.core.settings import get_graphql_settings
from graphql_mashup.features.graphql.fragments import Fragment

__all__ = ["DEFAULT_SCHEMA", "ModelConfig"]

DEFAULT_SCHEMA = """
type Query
type Mutation

schema {
  query: Query
  mutation: Mutation
}
"""


def _default_cache_size() -> int:
    return get_graphql_settings().cache_size


class ModelConfig(BaseModel):
    """Validated construction options for GraphQLModel."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    schema_sdl: str = Field(
        default=DEFAULT_SCHEMA,
        alias="schema",
        min_length=1,
        description="Base schema definition language",
    )
    root: Any = Field(
        default_factory=dict,
        description="Root resolver object shared by every request",
    )
    extensions: tuple[Any, ...] = Field(
        default=(),
        description="Schema fragments extending the base schema",
    )
    dependencies: tuple[Any, ...] = Field(
        default=(),
        description="Schema fragments merged ahead of extensions",
    )
    cache_size: PositiveInt = Field(
        default_factory=_default_cache_size,
        validation_alias=AliasChoices("cache_size", "cacheSize"),
        description="Maximum number of parsed query documents to cache",
    )

    @field_validator("extensions", "dependencies", mode="before")
    @classmethod
    def validate_fragments(cls, v: Any) -> tuple[Fragment, ...]:
        """Accept any iterable of Fragment instances."""
        if v is None:
            return ()
        if isinstance(v, (str, bytes, Fragment)):
            raise ValueError("must be a list of Fragment instances")
        fragments = tuple(v)
        for item in fragments:
            if not isinstance(item, Fragment):
                raise ValueError(f"expected Fragment, got {type(item).__name__}")
        return fragments

    @property
    def fragments(self) -> tuple[Fragment, ...]:
        """First composition level: dependencies, then extensions."""
        return (*self.dependencies, *self.extensions)
