"""
Structured logging configuration for the bank account service.

All logs are JSON-formatted with these standard fields:
- timestamp: ISO 8601 timestamp
- event: The log event name (first positional argument)
- request_id: UUID for tracing requests end-to-end
- duration_ms: Operation duration in milliseconds (request events)

Note: In structlog, the first positional argument to logger.info/warning/error
becomes the 'event' field in the JSON output automatically.
"""
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any, Optional

import structlog

from bank_service.config import settings

# Context variables for request-scoped data
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def add_context_vars(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that adds context variables to log entries."""
    request_id = request_id_ctx.get()

    if request_id:
        event_dict["request_id"] = request_id

    return event_dict


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog with JSON output and context processors."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=(level or settings.log_level).upper(),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            add_context_vars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def set_request_context(request_id: str) -> None:
    """Set the request context for logging."""
    request_id_ctx.set(request_id)


def clear_request_context() -> None:
    """Clear the request context after request completion."""
    request_id_ctx.set("")


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())
