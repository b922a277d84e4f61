"""Structured logging for Dev Radar.

structlog renders through the stdlib logging bridge so uvicorn and httpx
records share one format. Platform handles and profile links are user
identifiers: any event field named after a platform, or carrying a handle,
is masked before rendering, as are credentials.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from app.config import Environment, get_settings
from services.models import PLATFORM_KEYS

CREDENTIAL_MARKERS = ("token", "secret", "authorization", "api_key", "password", "cookie")

# Fields that identify a person on some platform.
HANDLE_FIELDS = frozenset({"handle", "username", "profile_url", "profiles", "links", *PLATFORM_KEYS})

UPSTREAM_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _redact_identifiers(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask credentials and platform handles in a log event."""
    for key in list(event_dict):
        lowered = key.lower()
        if any(marker in lowered for marker in CREDENTIAL_MARKERS):
            event_dict[key] = "[REDACTED]"
        elif lowered in HANDLE_FIELDS:
            event_dict[key] = "[HANDLE_REDACTED]"
    return event_dict


def _renderer(environment: Environment) -> structlog.types.Processor:
    if environment in (Environment.PRODUCTION, Environment.STAGING):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=environment == Environment.DEVELOPMENT)


def setup_logging() -> None:
    """Route structlog and stdlib logging through one redacting formatter."""
    settings = get_settings()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _redact_identifiers,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings.environment),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level.upper())

    upstream_level = logging.DEBUG if settings.debug else logging.WARNING
    for name in UPSTREAM_LOGGERS:
        logging.getLogger(name).setLevel(upstream_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
