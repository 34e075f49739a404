"""Caching for the GraphQL request pipeline."""

from graphql_mashup.features.graphql.caching.document_cache import (
    DEFAULT_CACHE_SIZE,
    DocumentCache,
)

__all__ = ["DEFAULT_CACHE_SIZE", "DocumentCache"]
