"""
Storefront Structured Logging Utilities using Structlog.

This module provides composable logging utilities built on structlog,
shared by the storefront gateway and its companion services.

Key Features:
- Async-safe request context management with contextvars
- Processor chains for flexible log enrichment
- Redaction of credentials before any renderer sees them
- Environment-based output formatting
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import Processor

REDACTED = "***"

SENSITIVE_KEYS = frozenset({"authorization", "token", "password"})


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Add OpenTelemetry-style service context to all logs.

    Fields added:
    - service.name: Logical service name (from SERVICE_NAME env var)
    - deployment.environment: Environment (development/staging/production)
    """
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def redact_credential(value: Any) -> str:
    """
    Redact a credential, keeping only its auth scheme.

    "Bearer abc.def" becomes "Bearer ***"; a bare token becomes "***".
    """
    if not isinstance(value, str) or not value:
        return REDACTED
    parts = value.split(None, 1)
    if len(parts) == 2:
        return f"{parts[0]} {REDACTED}"
    return REDACTED


def _redact_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: redact_credential(value) if key.lower() in SENSITIVE_KEYS else value
        for key, value in headers.items()
    }


def redact_sensitive_values(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Replace credentials in the event dictionary with a redacted form.

    Top-level keys named authorization/token/password are redacted, as are
    matching entries inside a ``headers`` mapping. Runs before rendering so
    no renderer or file handler ever receives a cleartext token.
    """
    for key in list(event_dict):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = redact_credential(event_dict[key])

    headers = event_dict.get("headers")
    if isinstance(headers, Mapping):
        event_dict["headers"] = _redact_headers(headers)
    return event_dict


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
) -> None:
    """
    Configure structlog for a storefront service.

    Args:
        service_name: Name of the service (e.g., "graphql-gateway-service")
        environment: Environment name (defaults to ENVIRONMENT env var)
        log_level: Logging level (defaults to "INFO")

    Environment Variables:
        LOG_FORMAT: Output format - "json" for JSON, "console" for human-readable
            (default: json in production, console elsewhere)
    """
    if environment is None:
        environment = os.getenv("ENVIRONMENT", "development")

    # Set environment variables for processors
    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    log_format = os.getenv("LOG_FORMAT", "").lower()
    use_json = log_format == "json" or (not log_format and environment == "production")

    shared_processors: list[Processor] = [
        merge_contextvars,
        add_service_context,
        redact_sensitive_values,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]

    if use_json:
        # JSON output for log aggregation (containers, production)
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # Human-readable console output (local development, tests)
        processors = [
            *shared_processors,
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_service_logger(name: str | None = None) -> Any:
    """
    Create a service logger with optional name binding.

    Args:
        name: Optional logger name (e.g., "classifier", "backend_client")

    Returns:
        A configured structlog BoundLogger instance
    """
    logger = structlog.get_logger()

    if name:
        logger = logger.bind(logger_name=name)

    return logger


def bind_request_context(correlation_id: str, **extra: Any) -> None:
    """Bind per-request fields so every log line of the request carries them."""
    clear_contextvars()
    bind_contextvars(correlation_id=correlation_id, **extra)


def clear_request_context() -> None:
    clear_contextvars()
