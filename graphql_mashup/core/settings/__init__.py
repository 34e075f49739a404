"""Modular Pydantic Settings v2 configuration.

Import settings via cached loaders:
    from graphql_mashup.core.settings import get_graphql_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables (production)
    4. .env file (development only)
    5. secrets_dir (Kubernetes/Docker secrets)
"""

from __future__ import annotations

from .graphql import GraphQLSettings
from .loader import clear_all_caches, get_graphql_settings, get_logging_settings
from .logs import LoggingSettings

__all__ = [
    "GraphQLSettings",
    "LoggingSettings",
    "clear_all_caches",
    "get_graphql_settings",
    "get_logging_settings",
]
