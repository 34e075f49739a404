"""Process-wide settings instances.

create_model() and setup_logging() read settings through these loaders, so
environment and conf.d files are parsed once. Tests that change either call
clear_all_caches() afterwards.
"""

from __future__ import annotations

from functools import lru_cache

from .graphql import GraphQLSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_graphql_settings() -> GraphQLSettings:
    """Model defaults used when create_model() is not given them."""
    return GraphQLSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


def clear_all_caches() -> None:
    """Forget loaded settings; the next loader call reads them again."""
    get_graphql_settings.cache_clear()
    get_logging_settings.cache_clear()
