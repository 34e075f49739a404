"""Settings for the logging a host process enables with setup_logging()."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_logging_yaml_source

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Where GraphQL model logs go and how they look.

    Read from ``LOG_*`` environment variables, e.g. ``LOG_LEVEL=DEBUG`` or
    ``LOG_FILE_PATH=/var/log/graphql.jsonl``. A handler without its own
    level follows ``level``.
    """

    service_name: str = Field(
        default="graphql-mashup",
        description="Value of the static 'service' key on JSON records",
    )
    level: LogLevel = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="One JSON object per line instead of text")

    console_enabled: bool = Field(default=True, description="Write records to stderr")
    console_level: LogLevel | None = None

    file_path: Path | None = Field(
        default=None,
        description="Rotating JSONL file; unset keeps logging off disk",
    )
    file_level: LogLevel | None = None
    file_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    file_backup_count: int = Field(default=5, ge=0, le=100)

    include_context: bool = Field(
        default=True,
        description="Copy set_log_context() values onto each record",
    )
    capture_warnings: bool = Field(default=True, description="Route warnings.warn() through logging")

    @field_validator("level", "console_level", "file_level", mode="before")
    @classmethod
    def normalize_level(cls, v: str | None) -> str | None:
        if isinstance(v, str):
            return v.upper()
        return v

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for configure_logging(), handler levels resolved."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "console_enabled": self.console_enabled,
            "console_level": self.console_level or self.level,
            "file_path": self.file_path,
            "file_level": self.file_level or self.level,
            "file_max_bytes": self.file_max_bytes,
            "file_backup_count": self.file_backup_count,
            "include_context": self.include_context,
            "capture_warnings": self.capture_warnings,
        }

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
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
        # conf.d YAML sits between explicit kwargs and the environment
        return (
            init_settings,
            create_logging_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
