"""
structlog setup for the ledger.

Development renders colored console lines; staging and production emit
one JSON object per event. Values bound for the current request
(request_id, method, path) live in structlog contextvars and are merged
into every event logged while that request is being served.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from stockledger.config.settings import Settings, get_settings

_configured = False


def app_context_processor(settings: Settings) -> Processor:
    """Build a processor stamping app name, version and environment on each event."""
    static = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }

    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in static.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def _renderers(settings: Settings) -> list[Processor]:
    if settings.environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def configure_logging(settings: Settings | None = None, *, force: bool = False) -> None:
    """
    Configure structlog and the stdlib root logger.

    Safe to call more than once; later calls are ignored unless ``force``
    is set, which also replaces any handlers already on the root logger.
    """
    global _configured
    if _configured and not force:
        return
    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        app_context_processor(settings),
        structlog.processors.StackInfoRenderer(),
        *_renderers(settings),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
        force=force,
    )
    _configured = True


def bind_request_context(**values: Any) -> None:
    """Replace the request-scoped logging context with ``values``."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def current_request_id() -> str | None:
    """Request id bound for the request being served, if any."""
    return structlog.contextvars.get_contextvars().get("request_id")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
