"""Logging configuration for the Pricing domain.

Standard library logging carries the handlers; structlog sits on top and
renders key/value events. Environment variables:

- `LOG_LEVEL` overrides the per-environment level.
- `LOG_DIR` is where `pricing.log` and `pricing_error.log` rotate. Set it
  empty to log to stdout only.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_STRUCTURED_ENVS = ("production", "staging")

_MAX_LOG_BYTES = 10 * 1024 * 1024


def _current_env() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Log level for the current environment, unless `LOG_LEVEL` is set."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(_current_env(), "INFO"))


def _rotating_handler(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def build_handlers(log_level: str, log_dir: str | None) -> list[logging.Handler]:
    """Console handler, plus rotating file handlers when `log_dir` is set."""
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    handlers: list[logging.Handler] = [console_handler]

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_handler(directory / "pricing.log", log_level))
        handlers.append(_rotating_handler(directory / "pricing_error.log", logging.ERROR))

    return handlers


def setup_stdlib_logging() -> None:
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = build_handlers(log_level, os.getenv("LOG_DIR", "logs"))

    # Suppress noisy library loggers
    logging.getLogger("protean").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if _current_env() in _STRUCTURED_ENVS:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    setup_stdlib_logging()
    setup_structlog()


def add_context(**kwargs: Any) -> None:
    """Bind request-scoped values (request id, path) to every following log event."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
