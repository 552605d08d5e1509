"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, MutableMapping, Optional

import structlog

from energy_accounts.config import Settings, settings

# Event keys that may carry raw card data
SENSITIVE_KEYS = frozenset({"card_number", "cardNumber", "cvv", "expiry_date", "expiryDate"})


def redact_card_data(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace raw card fields in an event with a fixed marker."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "[REDACTED]"
    return event_dict


def configure_logging(app_settings: Optional[Settings] = None) -> None:
    """Configure structured logging for the application.

    Args:
        app_settings: Settings to read level, environment and service name
            from (defaults to the global settings)
    """
    app_settings = app_settings or settings
    level = logging.getLevelName(app_settings.log_level.upper())
    production = app_settings.environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer(colors=app_settings.debug)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            redact_card_data,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Every event carries the service identity
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        service=app_settings.service_name,
        environment=app_settings.environment,
    )
