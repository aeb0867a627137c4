"""Structured logging for the Box Image Classification Service.

structlog renders every event, including records from uvicorn, grpc and
httpx that go through stdlib logging. JSON in production, colored console
output everywhere else.
"""

import logging
import sys
from enum import Enum

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from box_image_service import __version__

APP_NAME = "box-image-service"

# Third-party loggers capped at WARNING; uvicorn.access duplicates RequestTracingMiddleware
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "grpc", "uvicorn.access")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the service name and version."""
    event_dict["app"] = APP_NAME
    event_dict.setdefault("version", __version__)
    return event_dict


def render_enums(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Log enum members (status codes, signature kinds) by value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def build_processors(production: bool) -> list[Processor]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        render_enums,
    ]
    if production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown -> INFO)
        environment: "production" selects JSON output
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    production = environment.lower() == "production"
    processors = build_processors(production)

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
    )
