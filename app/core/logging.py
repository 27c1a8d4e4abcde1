"""
Structured logging for the connection ledger, built on structlog.

In development (app_env=dev) records are rendered as colored console lines.
Everywhere else they are JSON objects carrying timestamp, level, logger name,
the event text and every bound context var (notably ``request_id``).

Modules keep using the stdlib API and still get structured output:

    import logging
    logger = logging.getLogger(__name__)
    logger.info("Swipe registered for user %s", user_id)

Keys passed through ``extra=`` become fields of the rendered record:

    logger.info("Signal registered", extra={"actor_id": str(user_id), "matched": True})

The request middleware in ``app.main`` calls :func:`bind_request_context`
at the start of every request so all lines emitted while serving it share
the same ``request_id``.
"""

import logging
import sys
import uuid
from typing import Optional

import structlog

REQUEST_ID_HEADER = "X-Request-ID"


def configure_logging(app_env: str = "dev") -> None:
    """
    Install structlog processors and route the root stdlib logger through them.

    Args:
        app_env: "dev" selects ConsoleRenderer, anything else JSONRenderer.
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer = (
        structlog.dev.ConsoleRenderer()
        if app_env == "dev"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(logging.INFO)

    # SQL echo and access lines are only useful while developing
    if app_env != "dev":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def bind_request_context(request_id: Optional[str] = None, **extra) -> str:
    """
    Reset the per-request structlog context and bind a request id.

    Args:
        request_id: Incoming id (from the X-Request-ID header); generated if missing
        **extra: Additional key/values to bind (e.g. path, method)

    Returns:
        The request id that was bound
    """
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **extra)
    return request_id
