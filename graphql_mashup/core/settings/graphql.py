"""GraphQL model configuration settings.

Controls the parsed-document cache, validation limits and request tracing.
Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_graphql_yaml_source


class GraphQLSettings(BaseSettings):
    """GraphQL model configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_CACHE_SIZE=500, GRAPHQL_TRACING_ENABLED=false
    """

    # Parsed document cache
    cache_size: int = Field(
        default=100,
        ge=1,
        le=1_000_000,
        description="Maximum number of parsed and validated query documents kept in memory",
    )

    # Validation limits
    max_validation_errors: int | None = Field(
        default=None,
        ge=1,
        le=1000,
        description="Stop query validation after this many errors (None for the engine default)",
    )

    # Tracing
    tracing_enabled: bool = Field(
        default=True,
        description="Open an OpenTelemetry span per request",
    )
    include_document: bool = Field(
        default=False,
        description="Attach the query text to request spans (may expose sensitive data)",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_graphql_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
