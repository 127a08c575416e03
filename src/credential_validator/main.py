"""
FastAPI application entry point for the Credential Validator.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from credential_validator.api.dependencies import get_validation_pipeline
from credential_validator.api.error_handlers import EXCEPTION_HANDLERS
from credential_validator.api.middleware import RequestTracingMiddleware
from credential_validator.api.routes import router
from credential_validator.config import settings
from credential_validator.logging_config import configure_logging

# Configure structured logging before the app starts emitting events
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT, settings.REDACT_IDENTIFIERS)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the validation pipeline eagerly; a bad stage registry aborts startup."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        stages_config=settings.STAGES_CONFIG_PATH or "builtin",
        pass_threshold=settings.PASS_THRESHOLD,
    )

    pipeline = get_validation_pipeline()

    logger.info(
        "Application startup complete",
        stages=[spec.id for spec in pipeline.stages],
    )
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-stage validation of identity credential images",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Request tracing middleware (request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

# Register exception handlers
for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["validation"])

# Prometheus metrics instrumentation
if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "stages": "/stages",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "credential_validator.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
