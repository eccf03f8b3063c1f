# src/services/language_datasource_service/app/main.py
import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from dictionary_common.config import CONTENT_REPOSITORY_URL
from dictionary_common.health import create_health_router
from dictionary_common.logging_utils import (
    correlation_id_var,
    generate_correlation_id,
    request_context,
    setup_logging,
)
from dictionary_common.monitoring import HTTP_REQUEST_LATENCY_SECONDS, HTTP_REQUESTS_TOTAL

from .routers import dictionary_languages

SERVICE_PREFIX = "LDS"
SERVICE_NAME = "language_datasource_service"
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Language Datasource Service starting up (content repository: {CONTENT_REPOSITORY_URL}).")
    yield
    logger.info("Language Datasource Service has shut down gracefully.")


app = FastAPI(
    title="Dictionary Language Datasource",
    description=(
        "Lists the languages that can be added to, or already exist in, a translation "
        "dictionary, labelled and ordered for UI consumption."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

# --- Prometheus Metrics ---
Instrumentator().instrument(app).expose(app)


# Correlation ID Middleware
@app.middleware("http")
async def add_correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-Id") or generate_correlation_id(SERVICE_PREFIX)
    request_id = request.headers.get("X-Request-Id") or generate_correlation_id("REQ")
    trace_id = request.headers.get("X-Trace-Id") or uuid4().hex

    with request_context(correlation_id, request_id, trace_id):
        response = await call_next(request)

    response.headers["X-Correlation-Id"] = correlation_id
    response.headers["X-Request-Id"] = request_id
    response.headers["X-Trace-Id"] = trace_id
    return response


@app.middleware("http")
async def emit_http_observability(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start

    route = request.scope.get("route")
    labels = {
        "service": SERVICE_NAME,
        "method": request.method,
        "path": getattr(route, "path", request.url.path),
    }
    HTTP_REQUEST_LATENCY_SECONDS.labels(**labels).observe(elapsed)
    HTTP_REQUESTS_TOTAL.labels(status=str(response.status_code), **labels).inc()

    logger.info(
        "http_request_completed",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(elapsed * 1000, 2),
        },
    )
    return response


# Global Exception Handler
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catches any unhandled exceptions and returns a standardized 500 error response.
    """
    correlation_id = request.headers.get("X-Correlation-Id") or correlation_id_var.get()
    if correlation_id == "<not-set>":
        correlation_id = generate_correlation_id(SERVICE_PREFIX)
    logger.critical(
        f"Unhandled exception for request {request.method} {request.url}",
        exc_info=exc,
        extra={"correlation_id": correlation_id},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please contact support.",
            "correlation_id": correlation_id,
        },
    )


# This service depends on the content repository.
health_router = create_health_router("content_repository")
app.include_router(health_router)

app.include_router(dictionary_languages.router)
