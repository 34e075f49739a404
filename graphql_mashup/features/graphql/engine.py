"""Engine facade over graphql-core.

Schema composition, populate hooks and the request pipeline only talk to
the GraphQL engine through the narrow ``EngineFacade`` protocol. The default
``GraphQLCoreEngine`` delegates to graphql-core; tests substitute subclasses
that count or fail calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from graphql import (
    DocumentNode,
    ExecutionResult,
    GraphQLError,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    build_ast_schema,
    execute,
    extend_schema,
    parse,
    validate,
    validate_schema,
)
from graphql.pyutils import AwaitableOrValue
from graphql.validation.validate import validate_sdl

from graphql_mashup.features.graphql.introspection import introspect_fields

__all__ = ["EngineFacade", "FieldResolver", "GraphQLCoreEngine"]

FieldResolver = Callable[..., Any]


@runtime_checkable
class EngineFacade(Protocol):
    """Operations the composer, populate hooks and request pipeline rely on."""

    def parse(self, source: str) -> DocumentNode: ...

    def build_schema(self, document: DocumentNode) -> GraphQLSchema: ...

    def extend_schema(self, schema: GraphQLSchema, document: DocumentNode) -> GraphQLSchema: ...

    def validate_sdl(
        self, document: DocumentNode, schema: GraphQLSchema | None = None
    ) -> list[GraphQLError]: ...

    def validate_schema(self, schema: GraphQLSchema) -> list[GraphQLError]: ...

    def validate(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        max_errors: int | None = None,
    ) -> list[GraphQLError]: ...

    def execute(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        root_value: Any = None,
        context_value: Any = None,
        variable_values: Mapping[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> AwaitableOrValue[ExecutionResult]: ...

    def get_type(self, schema: GraphQLSchema, type_name: str) -> GraphQLNamedType | None: ...

    def set_resolver(
        self,
        schema: GraphQLSchema,
        type_name: str,
        field_name: str,
        resolver: FieldResolver,
    ) -> None: ...

    def field_names(self, schema: GraphQLSchema, type_name: str) -> list[str]: ...


class GraphQLCoreEngine:
    """Default engine facade backed by graphql-core."""

    def parse(self, source: str) -> DocumentNode:
        """Parse GraphQL source text, raising GraphQLSyntaxError on failure."""
        return parse(source)

    def build_schema(self, document: DocumentNode) -> GraphQLSchema:
        # SDL diagnostics are collected beforehand through validate_sdl()
        return build_ast_schema(document, assume_valid_sdl=True)

    def extend_schema(self, schema: GraphQLSchema, document: DocumentNode) -> GraphQLSchema:
        return extend_schema(schema, document, assume_valid_sdl=True)

    def validate_sdl(
        self, document: DocumentNode, schema: GraphQLSchema | None = None
    ) -> list[GraphQLError]:
        """Validate schema definition language against an optional base schema."""
        return list(validate_sdl(document, schema))

    def validate_schema(self, schema: GraphQLSchema) -> list[GraphQLError]:
        return list(validate_schema(schema))

    def validate(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        max_errors: int | None = None,
    ) -> list[GraphQLError]:
        """Validate an executable document against the schema."""
        return list(validate(schema, document, max_errors=max_errors))

    def execute(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        root_value: Any = None,
        context_value: Any = None,
        variable_values: Mapping[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> AwaitableOrValue[ExecutionResult]:
        return execute(
            schema,
            document,
            root_value=root_value,
            context_value=context_value,
            variable_values=variable_values,
            operation_name=operation_name,
        )

    def get_type(self, schema: GraphQLSchema, type_name: str) -> GraphQLNamedType | None:
        return schema.get_type(type_name)

    def set_resolver(
        self,
        schema: GraphQLSchema,
        type_name: str,
        field_name: str,
        resolver: FieldResolver,
    ) -> None:
        """Attach a resolver to ``type_name.field_name``.

        Raises:
            KeyError: If the type or field does not exist on the schema.
        """
        named_type = schema.get_type(type_name)
        if not isinstance(named_type, (GraphQLObjectType, GraphQLInterfaceType)):
            raise KeyError(f"Unknown object type: {type_name}")
        try:
            field = named_type.fields[field_name]
        except KeyError:
            raise KeyError(f"Unknown field: {type_name}.{field_name}") from None
        field.resolve = resolver

    def field_names(self, schema: GraphQLSchema, type_name: str) -> list[str]:
        """Return the declared field names of a type, or [] when absent."""
        return introspect_fields(schema, type_name)
