"""Structured logging for the API and the tenant data layer."""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers that are only interesting when something goes wrong
QUIET_LOGGERS: tuple[str, ...] = ("sqlalchemy.engine", "asyncpg", "httpx", "httpcore")


def _processor_chain(debug: bool) -> list[structlog.typing.Processor]:
    chain: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        chain.append(structlog.processors.JSONRenderer())
    return chain


def setup_logging(debug: bool = False) -> None:
    """Configure structlog on top of the standard library root logger.

    Args:
        debug: Render colored console lines instead of one JSON object per line.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    structlog.configure(
        processors=_processor_chain(debug),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Failed statements are logged by the tenant router itself
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the request correlation ID, if there is one, to later log events."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_tenant_context(user_id: str, tenant_id: str) -> None:
    """Attach the authenticated principal to later log events.

    Args:
        user_id: ``sub`` claim of the verified access token.
        tenant_id: ``tenant_id`` claim of the verified access token.
    """
    bind_contextvars(user_id=user_id, tenant_id=tenant_id)


def clear_request_context() -> None:
    clear_contextvars()
