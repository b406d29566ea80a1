"""
Structured logging for the storefront service.

structlog is configured once per process; every event carries a timestamp,
the level and, while a request is being served, its request id.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

import structlog
from structlog.types import EventDict

from .config import Settings, get_settings

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def add_request_id(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    request_id = request_id_ctx.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        add_request_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> structlog.typing.FilteringBoundLogger:
    return structlog.get_logger(name)


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind a request id for the current context, generating one if needed."""
    if request_id is None:
        request_id = uuid4().hex
    request_id_ctx.set(request_id)
    return request_id


def clear_context() -> None:
    request_id_ctx.set("")
