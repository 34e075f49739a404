"""Schema introspection helpers."""

from __future__ import annotations

from graphql import (
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
)

__all__ = ["introspect_fields"]


def introspect_fields(schema: GraphQLSchema, type_name: str) -> list[str]:
    """Return the declared field names of ``type_name`` in declaration order.

    Args:
        schema: Schema to inspect.
        type_name: Name of an object, interface or input object type,
            typically a root type such as ``"Query"`` or ``"Mutation"``.

    Returns:
        Field names, or an empty list if the type is absent or has no fields.

    Example:
        >>> introspect_fields(build_schema("type Query { a: Int b: Int }"), "Query")
        ['a', 'b']
    """
    named_type = schema.get_type(type_name)
    if not isinstance(named_type, (GraphQLObjectType, GraphQLInterfaceType, GraphQLInputObjectType)):
        return []
    return list(named_type.fields)
