"""Logging configuration using structlog.

Every record passes through the stdlib root logger, so uvicorn, SQLAlchemy
and botocore output share one stream with our own events.
"""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "botocore", "boto3", "s3transfer", "urllib3")


def setup_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog for structured logging.

    Args:
        debug: Coloured console output when True, one JSON object per line otherwise.
        level: Root log level name. Defaults to DEBUG in debug mode, INFO otherwise.
    """
    log_level = logging.getLevelName(level.upper()) if level else None
    if not isinstance(log_level, int):
        log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: list[structlog.typing.Processor]
    if debug:
        renderer = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None,
    method: str | None = None,
    path: str | None = None,
) -> None:
    """Bind request-level context to all subsequent log calls.

    Args:
        request_id: The correlation ID for the current request. Not bound when None.
        method: HTTP method, bound when given.
        path: URL path, bound when given.
    """
    context = {"request_id": request_id, "method": method, "path": path}
    bind_contextvars(**{k: v for k, v in context.items() if v})


def bind_principal_context(principal_id: str) -> None:
    """Bind the authenticated principal to all subsequent log calls."""
    bind_contextvars(principal_id=principal_id)


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()
