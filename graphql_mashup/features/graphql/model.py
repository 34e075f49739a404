"""GraphQL model: a composed schema plus its request pipeline.

Construction is a hard barrier: the schema is composed and validated in
``__init__`` and a model only exists once that succeeded. Each model owns
its own document cache, so independently configured models in one process
never share parsed documents.

Usage:
    model = create_model(
        schema="type Query { ping: String }",
        root={"ping": lambda info: "pong"},
    )
    result = await model.request(context, "{ ping }")
    assert result.data == {"ping": "pong"}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from graphql_mashup.core.settings import GraphQLSettings, get_graphql_settings
from graphql_mashup.features.graphql.caching import DocumentCache
from graphql_mashup.features.graphql.config import ModelConfig
from graphql_mashup.features.graphql.engine import EngineFacade, GraphQLCoreEngine
from graphql_mashup.features.graphql.pipeline import RequestPipeline
from graphql_mashup.features.graphql.schema_composer import SchemaComposer

if TYPE_CHECKING:
    from graphql import ExecutionResult, GraphQLSchema

logger = logging.getLogger(__name__)

__all__ = ["GraphQLModel", "create_model"]


class GraphQLModel:
    """Composed GraphQL schema served through a cached request pipeline.

    Args:
        config: Construction options.
        engine: Engine facade; defaults to graphql-core.
        settings: GraphQL settings; defaults to the cached environment settings.

    Raises:
        SchemaCompositionError: If the schema cannot be composed or is invalid.
    """

    def __init__(
        self,
        config: ModelConfig | None = None,
        *,
        engine: EngineFacade | None = None,
        settings: GraphQLSettings | None = None,
    ) -> None:
        self.config = config or ModelConfig()
        self.engine = engine or GraphQLCoreEngine()
        settings = settings or get_graphql_settings()

        schema = SchemaComposer(self.engine).compose(self.config.schema_sdl, self.config.fragments)

        self._cache = DocumentCache(self.config.cache_size)
        self._pipeline = RequestPipeline(
            schema,
            self._cache,
            self.engine,
            root_value=self.config.root,
            max_validation_errors=settings.max_validation_errors,
            tracing_enabled=settings.tracing_enabled,
            include_document=settings.include_document,
        )
        logger.info(
            "GraphQL model ready",
            extra={"cache_size": self.config.cache_size},
        )

    @property
    def schema(self) -> GraphQLSchema:
        """The composed schema. Treat as read-only."""
        return self._pipeline.schema

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    async def request(
        self,
        context: Any = None,
        query: Any = None,
        variables: Mapping[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> ExecutionResult:
        """Parse (or fetch from cache), validate and execute a query.

        Args:
            context: Opaque value passed to resolvers as ``info.context``.
            query: Query text.
            variables: Variable values for the operation.
            operation_name: Operation to run when the document has several.

        Returns:
            ExecutionResult. Field errors are reported on ``result.errors``.

        Raises:
            RequestError: For a missing or malformed query, or an executor failure.
        """
        return await self._pipeline.handle(context, query, variables, operation_name)


def create_model(
    config: ModelConfig | Mapping[str, Any] | None = None,
    *,
    engine: EngineFacade | None = None,
    settings: GraphQLSettings | None = None,
    **options: Any,
) -> GraphQLModel:
    """Build a GraphQLModel from a config object, a mapping or keyword options.

    Example:
        model = create_model({"schema": sdl, "extensions": [users], "cacheSize": 50})
        model = create_model(schema=sdl, extensions=[users], cache_size=50)
    """
    if isinstance(config, ModelConfig):
        if options:
            raise TypeError("Pass either a ModelConfig or keyword options, not both")
    else:
        config = ModelConfig.model_validate({**(config or {}), **options})
    return GraphQLModel(config, engine=engine, settings=settings)
