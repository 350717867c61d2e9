import logging

import structlog
from structlog.contextvars import merge_contextvars

from flowforge.core.settings import settings
from flowforge.infrastructure.observability.correlation import (
    CorrelationLogFilter,
    get_correlation_id,
)


def add_context_vars(_, __, event_dict):
    """
    Processor that stamps the correlation id and renames `event` to the
    canonical `message` field.
    """
    cid = get_correlation_id()
    if cid:
        event_dict["correlation_id"] = cid

    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")

    return event_dict


def configure_structlog():
    """
    Configures structlog to render canonical JSON through stdlib logging.
    """
    handler = logging.StreamHandler()
    handler.addFilter(CorrelationLogFilter())

    # Standard formatter for non-structlog records (uvicorn startup, etc.)
    standard_formatter = logging.Formatter(
        " [%(asctime)s] [%(levelname)s] [trace_id=%(correlation_id)s] %(name)s: %(message)s"
    )
    handler.setFormatter(standard_formatter)

    log_level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[handler],
    )

    processors = [
        merge_contextvars,
        add_context_vars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
