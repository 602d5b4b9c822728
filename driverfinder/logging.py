"""structlog wiring shared by the library and its callers."""

from __future__ import annotations

import logging
import os
from typing import Any

import structlog

SERVICE_NAME = "driverfinder"


def _get_log_level(level: str | None = None) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(
    log_file: str | os.PathLike | None = None,
    *,
    level: str | None = None,
) -> None:
    """Configure structlog for structured logging of proximity searches.

    - JSON lines with ISO/UTC timestamp, level, service, event and bound fields
    - Console renderer when APP_ENV=dev (unless LOG_FORMAT is set explicitly)
    - ``level`` overrides LOG_LEVEL when given
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    log_format = os.getenv("LOG_FORMAT", "json").lower()
    if os.getenv("APP_ENV") == "dev" and "LOG_FORMAT" not in os.environ:
        log_format = "console"

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(str(log_file))
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=_get_log_level(level),
        handlers=handlers,
        force=True,
    )
