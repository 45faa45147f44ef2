"""
Bank Account Service

A FastAPI application exposing generated CRUD endpoints for bank accounts.
Each write responds with alert headers (X-<app>-alert, X-<app>-params) that
a client can turn into user-facing notifications; client errors carry
X-<app>-error instead.
"""
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from bank_service import metrics
from bank_service.api import router
from bank_service.api.header_util import create_failure_alert
from bank_service.config import settings
from bank_service.database import engine, Base
from bank_service.errors import (
    BadRequestAlertException,
    CONSTRAINT_VIOLATION_TYPE,
    DEFAULT_TYPE,
    ERR_VALIDATION,
)
from bank_service.logging import (
    configure_logging,
    get_logger,
    set_request_context,
    clear_request_context,
    generate_request_id,
)
from bank_service.schemas import FieldError, Problem

# Importing the models registers their tables on Base
from bank_service import models  # noqa: F401

# Configure structured logging
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "service_starting",
        service_name=settings.service_name,
        database_url=engine.url.render_as_string(hide_password=True),
    )

    # Create tables if they don't exist (in production, use migrations)
    Base.metadata.create_all(bind=engine)

    logger.info("service_started", service_name=settings.service_name)

    yield

    logger.info("service_stopping", service_name=settings.service_name)


app = FastAPI(
    title="Bank Account Service",
    description="Generated CRUD endpoints for bank accounts",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """
    Middleware for request tracing, logging, and metrics.

    Sets up request context with:
    - request_id: Unique identifier for tracing
    - Timing for duration_ms calculation
    - Prometheus metrics collection
    """
    method = request.method
    path = request.url.path

    # Skip logging/metrics for health and metrics endpoints
    if path in ("/health", "/metrics"):
        return await call_next(request)

    # Generate and set request ID
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    set_request_context(request_id)

    # Store request_id in request state for access in exception handlers
    request.state.request_id = request_id

    start_time = time.perf_counter()

    logger.info("request_received", method=method, path=path)

    try:
        response = await call_next(request)

        duration_seconds = time.perf_counter() - start_time

        logger.info(
            "request_completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round(duration_seconds * 1000, 2),
        )

        # Label by route template so IDs don't explode cardinality
        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        metrics.record_http_request(method, endpoint, response.status_code, duration_seconds)

        # Add request_id to response headers for tracing
        response.headers["X-Request-ID"] = request_id

        return response

    except Exception as e:
        duration_seconds = time.perf_counter() - start_time

        logger.error(
            "request_failed",
            method=method,
            path=path,
            duration_ms=round(duration_seconds * 1000, 2),
            error=str(e),
        )

        metrics.record_http_request(method, path, 500, duration_seconds)

        raise

    finally:
        clear_request_context()


@app.exception_handler(BadRequestAlertException)
async def bad_request_alert_handler(request: Request, exc: BadRequestAlertException):
    """Render a rejected request as a problem with failure-alert headers."""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.warning(
        "bad_request_alert",
        entity_name=exc.entity_name,
        error_key=exc.error_key,
        detail=exc.message,
    )

    problem = Problem(
        type=DEFAULT_TYPE,
        title=exc.message,
        status=status.HTTP_400_BAD_REQUEST,
        entityName=exc.entity_name,
        errorKey=exc.error_key,
        **exc.alert_parameters,
    )
    headers = create_failure_alert(exc.entity_name, exc.error_key, exc.message)
    headers["X-Request-ID"] = request_id
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Render an invalid request body or parameter as a 400 problem."""
    field_errors = [
        FieldError(
            objectName=str(error["loc"][0]),
            field=".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            message=error["msg"],
        )
        for error in exc.errors()
    ]

    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        field_errors=[fe.model_dump() for fe in field_errors],
    )

    problem = Problem(
        type=CONSTRAINT_VIOLATION_TYPE,
        title="Method argument not valid",
        status=status.HTTP_400_BAD_REQUEST,
        message=ERR_VALIDATION,
        fieldErrors=field_errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=problem.model_dump(exclude_none=True),
    )


# Include API routes
app.include_router(router)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "ok", "service": settings.service_name}


@app.get("/metrics")
async def metrics_endpoint():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
