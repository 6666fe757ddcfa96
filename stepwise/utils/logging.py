"""
Structured logging for Stepwise.

All modules obtain their logger via ``get_logger(__name__)`` and log
snake_case event names with keyword fields:

    logger.info("case_halted", case_id=case_id, progress=[0, 1, 0])
"""

import logging
import sys
from typing import Any

import structlog

SENSITIVE_KEYS = ("password", "secret", "api_key", "token", "authorization", "mongo_uri")
REDACTED = "***REDACTED***"

_configured = False


def _is_sensitive(key: str) -> bool:
    key = key.lower()
    # Counters such as "input_tokens" are not credentials
    if key == "tokens" or key.endswith("_tokens"):
        return False
    return any(marker in key for marker in SENSITIVE_KEYS)


def filter_sensitive_data(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor that redacts credential-like fields."""
    for key in list(event_dict.keys()):
        if key == "event":
            continue
        if _is_sensitive(key) and event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structlog and the stdlib root handler.

    Args:
        level: Minimum log level name
        json_logs: Render JSON lines instead of the console renderer
    """
    global _configured

    log_level = getattr(logging, level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            filter_sensitive_data,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, configuring from settings on first use."""
    if not _configured:
        from stepwise.config.settings import settings

        configure_logging(
            level="DEBUG" if settings.debug else settings.log_level,
            json_logs=settings.log_json,
        )
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger", "filter_sensitive_data"]
