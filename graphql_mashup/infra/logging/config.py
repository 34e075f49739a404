"""Root logger wiring for hosts that embed a GraphQL model.

The library itself only emits records; a host opts in with setup_logging().
Records are put on a queue by a single root QueueHandler and written to
stderr and/or a rotating JSONL file by a QueueListener thread, so resolvers
never block on log I/O.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
import time
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from graphql_mashup.infra.logging.context import ContextInjectingFilter
from graphql_mashup.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from graphql_mashup.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
JSON_KEYS = {"level": "levelname", "logger": "name", "message": "message"}


class _QueuePipeline:
    """The queue, its root handler and the listener draining it."""

    def __init__(self, handlers: list[logging.Handler], include_context: bool) -> None:
        self.queue: Queue[logging.LogRecord] = Queue()
        self.handler = QueueHandler(self.queue)
        if include_context:
            self.handler.addFilter(ContextInjectingFilter())
        self.listener = QueueListener(self.queue, *handlers, respect_handler_level=True) if handlers else None

    def start(self) -> None:
        if self.listener is not None:
            self.listener.start()
        logging.getLogger().addHandler(self.handler)

    def drain(self, max_wait: float) -> None:
        if self.listener is None:
            return
        deadline = time.monotonic() + max_wait
        while not self.queue.empty() and time.monotonic() < deadline:
            time.sleep(0.01)

    def stop(self) -> None:
        logging.getLogger().removeHandler(self.handler)
        if self.listener is not None:
            self.drain(5.0)
            self.listener.stop()
            for handler in self.listener.handlers:
                handler.close()


_active: _QueuePipeline | None = None


def is_configured() -> bool:
    """Whether setup_logging() or configure_logging() is in effect."""
    return _active is not None


def complete(max_wait: float = 5.0) -> None:
    """Block until queued records are written, for at most ``max_wait`` seconds."""
    if _active is not None:
        _active.drain(max_wait)


def shutdown() -> None:
    """Flush and detach the queue logging installed by configure_logging().

    configure_logging() registers it with atexit. Calling it again is a no-op.
    """
    global _active

    if _active is not None:
        _active.stop()
        _active = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Configure logging once per process.

    Args:
        log_settings: Settings to apply. Defaults to get_logging_settings().
        force: Replace an existing configuration instead of keeping it.
        **configure_kwargs: Values that override the settings, using
            configure_logging() argument names.
    """
    if _active is not None and not force:
        return

    if log_settings is None:
        from graphql_mashup.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **configure_kwargs})


def configure_logging(
    log_level: str = "INFO",
    console_level: str | None = None,
    file_level: str | None = None,
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "graphql-mashup",
    **kwargs: Any,
) -> None:
    """Install the root QueueHandler and start its listener.

    Any previous configuration made here is shut down first. Handler levels
    left as None follow ``log_level``; ``file_path=None`` keeps logs off disk.
    Unknown keyword arguments are ignored and reported at DEBUG.
    """
    global _active

    if kwargs:
        logger.debug("Ignoring unknown logging options: %s", ", ".join(sorted(kwargs)))

    shutdown()
    logging.captureWarnings(capture_warnings)

    # Drop whatever the host had on root; the queue handler replaces it
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {"level": log_level.upper(), "handlers": []},
        }
    )

    formatter = _build_formatter(json_logs, service_name)
    handlers: list[logging.Handler] = []
    if console_enabled:
        handlers.append(_with_level(logging.StreamHandler(), console_level or log_level, formatter))
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path, maxBytes=file_max_bytes, backupCount=file_backup_count, encoding="utf-8"
        )
        handlers.append(_with_level(file_handler, file_level or log_level, formatter))

    _active = _QueuePipeline(handlers, include_context)
    _active.start()
    atexit.unregister(shutdown)
    atexit.register(shutdown)


def _with_level(handler: logging.Handler, level: str, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level.upper())
    handler.setFormatter(formatter)
    return handler


def _build_formatter(json_logs: bool, service_name: str) -> logging.Formatter:
    if json_logs:
        return JSONFormatter(fmt_keys=JSON_KEYS, static={"service": service_name})
    return logging.Formatter(fmt=TEXT_FORMAT)
