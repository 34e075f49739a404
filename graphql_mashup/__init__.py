"""Compose GraphQL schema fragments and serve cached, validated requests.

Example:
    from graphql_mashup import Fragment, create_model

    model = create_model(
        schema="type Query { ping: String }",
        root={"ping": lambda info: "pong"},
    )
    result = await model.request(None, "{ ping }")
"""

from __future__ import annotations

from graphql_mashup.core.exceptions import (
    GraphQLModelError,
    ModelError,
    RequestError,
    SchemaCompositionError,
)
from graphql_mashup.features.graphql.config import DEFAULT_SCHEMA, ModelConfig
from graphql_mashup.features.graphql.engine import EngineFacade, GraphQLCoreEngine
from graphql_mashup.features.graphql.error_handler import raise_for_field_errors
from graphql_mashup.features.graphql.fragments import Fragment, PopulateHook
from graphql_mashup.features.graphql.introspection import introspect_fields
from graphql_mashup.features.graphql.model import GraphQLModel, create_model

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_SCHEMA",
    "EngineFacade",
    "Fragment",
    "GraphQLCoreEngine",
    "GraphQLModel",
    "GraphQLModelError",
    "ModelConfig",
    "ModelError",
    "PopulateHook",
    "RequestError",
    "SchemaCompositionError",
    "create_model",
    "introspect_fields",
    "raise_for_field_errors",
]
