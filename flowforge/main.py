from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flowforge import __version__
from flowforge.api.v1.api_router import v1_router
from flowforge.api.v1.errors import ApiError, api_error_exception_handler, error_body
from flowforge.core.settings import settings
from flowforge.infrastructure.container import WorkflowContainer
from flowforge.infrastructure.observability.correlation import CorrelationMiddleware
from flowforge.infrastructure.observability.logger_config import configure_structlog

# Configure Structlog (JSON Logging)
configure_structlog()
logger = structlog.get_logger(__name__)
logger.info(
    "runtime_mode",
    app_env=settings.APP_ENV,
    generation_model=settings.GENERATION_MODEL,
    anthropic_key_configured=bool(str(settings.ANTHROPIC_API_KEY or "").strip()),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = WorkflowContainer()
    app.state.container = container
    await container.startup()
    try:
        yield
    finally:
        await container.shutdown()


app = FastAPI(
    title="flowforge n8n Workflow Generation API",
    description="Turns free-text automation requests into importable n8n workflows.",
    version=__version__,
    lifespan=lifespan,
)


# Register Middleware (Stack order: Last added runs FIRST)

# 2. CORS (Inner)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# 1. Correlation Middleware (Outer) - Generates/Extracts Request ID
app.add_middleware(CorrelationMiddleware)


@app.exception_handler(ResponseValidationError)
async def response_validation_exception_handler(request: Request, exc: ResponseValidationError):
    """
    Handles errors when the backend fails to match the output contract (response_model).
    """
    logger.error(
        "backend_contract_breach",
        type="contract_violation",
        direction="outbound_backend",
        endpoint=str(request.url),
        validation_errors=exc.errors(),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Malformed request bodies never reach the pipeline; they are reported as
    invalid request data.
    """
    logger.warning(
        "invalid_request_data",
        endpoint=str(request.url),
        validation_errors=exc.errors(),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            "INVALID_REQUEST",
            "Invalid request data",
            [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                for err in exc.errors()
            ],
        ),
    )


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return await api_error_exception_handler(request, exc)


# Include Modular Routers
app.include_router(v1_router)


@app.get("/health")
def health_check():
    """
    Service health check.
    """
    return {"status": "ok", "service": "flowforge", "api_v1": "available"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
