"""GraphQL schema composition and request handling on graphql-core.

This module provides:
- Fragment trees composed into one validated schema
- Populate hooks attaching resolvers after each composition level
- A request pipeline with a bounded cache of validated documents
- One normalized error shape for composition and request failures
"""

from __future__ import annotations

from typing import Any

__all__ = ["Fragment", "GraphQLModel", "ModelConfig", "create_model"]


def __getattr__(name: str) -> Any:
    if name in {"GraphQLModel", "create_model"}:
        from graphql_mashup.features.graphql import model

        return getattr(model, name)
    if name == "ModelConfig":
        from graphql_mashup.features.graphql.config import ModelConfig

        return ModelConfig
    if name == "Fragment":
        from graphql_mashup.features.graphql.fragments import Fragment

        return Fragment
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
