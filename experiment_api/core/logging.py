"""Structured logging configuration.

Log calls use snake_case event names with key/value context:

    logger.info("link_signed", session_id="S1", expires_in=300)

Development renders colored console output, every other environment renders
JSON lines. Values of sensitive keys are redacted before rendering.
"""

import logging
import re
import sys
from typing import (
    Any,
    Dict,
    MutableMapping,
)

import structlog
from structlog.types import (
    EventDict,
    Processor,
)

from experiment_api.core.config import (
    Environment,
    settings,
)

SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^authorization$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Args:
        data: Dictionary that may contain sensitive data

    Returns:
        New dictionary with sensitive values replaced by [REDACTED]
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor that redacts sensitive fields in event_dict."""
    event = event_dict.pop("event", None)
    sanitized = sanitize_for_logging(dict(event_dict))
    if event is not None:
        sanitized["event"] = event
    return sanitized


def _renderer() -> Processor:
    if settings.LOG_FORMAT == "json" or settings.APP_ENV != Environment.DEVELOPMENT:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging() -> None:
    """Configure stdlib logging and structlog."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _renderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = structlog.get_logger("experiment_api")
