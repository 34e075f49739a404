"""Schema composer.

Builds one validated GraphQL schema from a base schema text and a tree of
fragments. Composition runs once, at model construction:

1. The base schema text is parsed, SDL-validated and built.
2. The first level (top-level dependencies and extensions) is flattened,
   its joined text SDL-validated against the current schema and merged with
   ``extend_schema``. Type definitions declared anywhere in the deferred
   extensions are merged here too, so any fragment may reference a type a
   nested extension defines.
3. The level's populate hooks run in flatten order with ``(schema, engine)``.
4. All deferred extensions of the level form the next level, composed the
   same way with the current schema as base. Their ``extend`` blocks are
   merged only now, after the hooks ran.
5. The final schema is structurally validated; all diagnostics are raised
   together.

Any failure raises SchemaCompositionError; a partial schema never escapes.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    GraphQLError,
    TypeDefinitionNode,
)

from graphql_mashup.core.exceptions import SchemaCompositionError
from graphql_mashup.features.graphql.engine import EngineFacade, GraphQLCoreEngine
from graphql_mashup.features.graphql.fragments import Fragment, Mashup, flatten_fragments
from graphql_mashup.infra.metrics.prometheus import (
    graphql_schema_composition_duration_seconds,
    graphql_schema_compositions_total,
)

if TYPE_CHECKING:
    from graphql import DefinitionNode, GraphQLSchema

logger = logging.getLogger(__name__)

__all__ = ["SchemaComposer", "compose_schema"]

# Definitions merged ahead of their level; extensions keep their level
DECLARATION_NODES = (TypeDefinitionNode, DirectiveDefinitionNode)


class SchemaComposer:
    """Compose fragments into a single validated schema.

    Example:
        composer = SchemaComposer()
        schema = composer.compose(
            "type Query { ping: String }",
            [Fragment(schema="extend type Query { pong: String }")],
        )
    """

    def __init__(self, engine: EngineFacade | None = None) -> None:
        self.engine = engine or GraphQLCoreEngine()
        self._levels = 0
        self._blocks = 0
        self._hooks = 0
        self._documents: dict[str, DocumentNode] = {}
        self._hoisted: set[int] = set()

    def compose(self, base_sdl: str, fragments: Iterable[Fragment] = ()) -> GraphQLSchema:
        """Compose the base schema and fragments into one validated schema.

        Args:
            base_sdl: Base schema definition language.
            fragments: First-level fragments, in precedence order.

        Returns:
            The composed and validated schema.

        Raises:
            SchemaCompositionError: If any text fails to parse or merge, a
                populate hook fails, or the final schema is invalid.
        """
        self._levels = self._blocks = self._hooks = 0
        self._documents = {}
        self._hoisted = set()
        start = time.perf_counter()
        try:
            schema = self._build_base(base_sdl)
            fragments = list(fragments)
            declarations = self._deferred_declarations(flatten_fragments(fragments).nested_extensions)
            self._hoisted = {id(node) for node in declarations}
            schema = self._compose_level(schema, fragments, declarations)
            self._validate(schema)
        except SchemaCompositionError:
            graphql_schema_compositions_total.labels(status="error").inc()
            raise
        finally:
            graphql_schema_composition_duration_seconds.observe(time.perf_counter() - start)

        graphql_schema_compositions_total.labels(status="success").inc()
        logger.info(
            "Composed GraphQL schema",
            extra={
                "levels": self._levels,
                "schema_blocks": self._blocks,
                "populate_hooks": self._hooks,
                "hoisted_definitions": len(self._hoisted),
            },
        )
        return schema

    def _build_base(self, base_sdl: str) -> GraphQLSchema:
        document = self._parse(base_sdl, "Invalid GraphQL base schema")
        self._check_sdl(document, None)
        try:
            return self.engine.build_schema(document)
        except (GraphQLError, TypeError) as exc:
            raise SchemaCompositionError("Invalid GraphQL base schema", errors=[exc]) from exc

    def _compose_level(
        self,
        schema: GraphQLSchema,
        fragments: list[Fragment],
        declarations: Sequence[DefinitionNode] = (),
    ) -> GraphQLSchema:
        mashup = flatten_fragments(fragments)
        if not mashup:
            return schema

        self._levels += 1
        self._blocks += len(mashup.schema_texts)
        definitions = [node for node in self._level_definitions(mashup) if id(node) not in self._hoisted]
        schema = self._merge(schema, [*definitions, *declarations])
        self._populate(schema, mashup)

        if mashup.nested_extensions:
            schema = self._compose_level(schema, list(mashup.nested_extensions))
        return schema

    def _level_definitions(self, mashup: Mashup) -> list[DefinitionNode]:
        if not mashup.schema_texts:
            return []
        return list(self._parse(mashup.sdl, "Invalid GraphQL schema extension").definitions)

    def _deferred_declarations(self, extensions: Sequence[Fragment]) -> list[DefinitionNode]:
        """Collect type and directive definitions from every deferred level.

        Levels are walked exactly as ``_compose_level`` will compose them, and
        parsed documents are memoized per text, so hoisted nodes can be
        recognized by identity when their own level is merged.
        """
        declarations: list[DefinitionNode] = []
        pending = list(extensions)
        while pending:
            mashup = flatten_fragments(pending)
            declarations.extend(
                node for node in self._level_definitions(mashup) if isinstance(node, DECLARATION_NODES)
            )
            pending = list(mashup.nested_extensions)
        return declarations

    def _merge(self, schema: GraphQLSchema, definitions: list[DefinitionNode]) -> GraphQLSchema:
        if not definitions:
            return schema

        document = DocumentNode(definitions=tuple(definitions))
        self._check_sdl(document, schema)
        try:
            return self.engine.extend_schema(schema, document)
        except (GraphQLError, TypeError) as exc:
            raise SchemaCompositionError("Invalid GraphQL schema extension", errors=[exc]) from exc

    def _populate(self, schema: GraphQLSchema, mashup: Mashup) -> None:
        for hook in mashup.populate_hooks:
            self._hooks += 1
            try:
                hook(schema, self.engine)
            except Exception as exc:
                hook_name = getattr(hook, "__qualname__", repr(hook))
                logger.exception("Populate hook failed", extra={"hook": hook_name})
                raise SchemaCompositionError(
                    f"Populate hook {hook_name} failed",
                    errors=[exc],
                ) from exc

    def _parse(self, source: str, message: str) -> DocumentNode:
        document = self._documents.get(source)
        if document is None:
            try:
                document = self.engine.parse(source)
            except (GraphQLError, RecursionError) as exc:
                raise SchemaCompositionError(message, errors=[exc]) from exc
            self._documents[source] = document
        return document

    def _check_sdl(self, document: DocumentNode, schema: GraphQLSchema | None) -> None:
        errors = self.engine.validate_sdl(document, schema)
        if errors:
            raise SchemaCompositionError("Invalid GraphQL schema", errors=errors)

    def _validate(self, schema: GraphQLSchema) -> None:
        errors = self.engine.validate_schema(schema)
        if errors:
            logger.error(
                "GraphQL schema failed validation",
                extra={"error_count": len(errors)},
            )
            raise SchemaCompositionError("Invalid GraphQL schema", errors=errors)


def compose_schema(
    base_sdl: str,
    fragments: Iterable[Fragment] = (),
    engine: EngineFacade | None = None,
) -> GraphQLSchema:
    """Compose a schema with a one-off SchemaComposer."""
    return SchemaComposer(engine).compose(base_sdl, fragments)
