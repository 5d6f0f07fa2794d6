"""
PlanPulse Structured Logging

Scorers log through structlog; every event carries the service name,
version and environment so engine output can be told apart when it is
embedded in the web backend's log stream.
"""

import logging
import sys
from typing import Any, MutableMapping

import structlog

from planpulse.platform.config import settings


def add_service_context(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Stamp each event with the service identity."""
    event_dict.setdefault("service", settings.APP_NAME.lower())
    event_dict.setdefault("version", settings.VERSION)
    event_dict.setdefault("env", settings.APP_ENV)
    return event_dict


def _renderer() -> Any:
    if settings.APP_ENV == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger it writes through."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            add_service_context,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, e.g. one per scorer class."""
    return structlog.get_logger(name)
