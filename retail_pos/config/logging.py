"""
structlog setup shared by the API server and the management CLI.

Development gets a readable console renderer; staging and production
emit one JSON object per line with the service identity attached.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from retail_pos.config.settings import Settings, get_settings

# Libraries whose INFO chatter drowns out checkout events
QUIET_LOGGERS = ("aiosqlite", "uvicorn.access")


def service_context(settings: Settings) -> Processor:
    """Processor stamping every event with the service identity.

    Keys the caller already set win, so an event's own ``version``
    (a migration version, say) is never replaced.
    """
    identity = {
        "service": settings.app_name,
        "app_version": settings.app_version,
        "environment": settings.environment,
    }

    def add_service(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in identity.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service


def _renderers(settings: Settings) -> list[Processor]:
    if settings.environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def configure_logging(settings: Settings | None = None) -> None:
    """Route structlog through stdlib logging at the configured level."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            service_context(settings),
            *_renderers(settings),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
