import logging
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from structlog.contextvars import bind_contextvars, unbind_contextvars

CORRELATION_ID_HEADER = "X-Correlation-ID"

correlation_id_ctx: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    return correlation_id_ctx.get()


class CorrelationLogFilter(logging.Filter):
    """Exposes the current correlation id to stdlib log formatters."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Reuses the caller's X-Correlation-ID (or mints one) for the lifetime of
    the request and echoes it back in the response headers.
    """

    async def dispatch(self, request: Request, call_next):
        incoming = str(request.headers.get(CORRELATION_ID_HEADER) or "").strip()
        correlation_id = incoming[:128] or str(uuid.uuid4())

        token = correlation_id_ctx.set(correlation_id)
        bind_contextvars(correlation_id=correlation_id)
        try:
            response = await call_next(request)
        finally:
            unbind_contextvars("correlation_id")
            correlation_id_ctx.reset(token)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
