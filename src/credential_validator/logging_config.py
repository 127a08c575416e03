"""Structured logging configuration using structlog.

Provides JSON output for production (parseable by ELK, Loki, CloudWatch)
and pretty console output for development. Credential identifiers passed
as top-level event keys are masked before any renderer sees them.
"""

import logging
import sys
from typing import Callable

import structlog
from structlog.types import EventDict, WrappedLogger

from credential_validator import __version__
from credential_validator.pii.redactor import SENSITIVE_FIELDS, redact_identifier


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application context to all log events."""
    event_dict["app"] = "credential-validator"
    event_dict["version"] = __version__
    return event_dict


def build_identifier_masker(
    redact_enabled: bool = True,
) -> Callable[[WrappedLogger, str, EventDict], EventDict]:
    """Build a processor masking sensitive keys (curp, elector_key, name).

    Covers ad-hoc `logger.info(..., curp=...)` calls and foreign stdlib
    records alike; nested structures go through `redact_fields` at the call site.
    """

    def mask_identifiers(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        if not redact_enabled:
            return event_dict
        for key in SENSITIVE_FIELDS.intersection(event_dict):
            value = event_dict[key]
            if isinstance(value, str):
                event_dict[key] = redact_identifier(value)
        return event_dict

    return mask_identifiers


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    redact_identifiers: bool = True,
) -> None:
    """Configure structlog for structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment name (development, production)
        redact_identifiers: Mask credential identifiers in log events

    In production mode:
        - JSON output for machine parsing
        - ISO timestamps
        - Exception info included

    In development mode:
        - Pretty colored console output
    """
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    # Shared processors for structlog and stdlib records
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        build_identifier_masker(redact_identifiers),
    ]

    is_production = environment.lower() == "production"

    if is_production:
        # JSON output for log aggregators
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        # ConsoleRenderer pretty-prints exc_info itself
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Route stdlib logging (uvicorn, fastapi) through the same renderer
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level_int)

    root_logger = logging.getLogger()
    # Clear existing handlers to avoid duplicates on reload
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)

    # Pillow logs each image plugin it tries while identifying a format
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    # Request lines are already logged by RequestTracingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
        redact_identifiers=redact_identifiers,
    )
