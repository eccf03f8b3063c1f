# src/libs/dictionary-common/dictionary_common/logging_utils.py
import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
from pythonjsonlogger import jsonlogger

from .config import ENVIRONMENT, LOG_LEVEL, SERVICE_NAME

# Request-scoped identifiers stamped on every log line emitted while a request is served.
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="<not-set>")
request_id_var: ContextVar[str] = ContextVar("request_id", default="<not-set>")
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="<not-set>")

class CorrelationIdFilter(logging.Filter):
    """Copies the request identifiers and the service identity onto each record."""
    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        record.request_id = request_id_var.get()
        record.trace_id = trace_id_var.get()
        record.service = SERVICE_NAME
        record.environment = ENVIRONMENT
        return True

def setup_logging():
    """
    Configures the root logger for structured JSON logging on stdout. Every
    logger in the service (datasource pipeline, repositories, uvicorn)
    inherits it, so request identifiers appear on all of their records.
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers to prevent duplicate logs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(LOG_LEVEL)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(service)s %(environment)s %(correlation_id)s %(request_id)s %(trace_id)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    )
    handler.addFilter(CorrelationIdFilter())

    root_logger.addHandler(handler)

@contextmanager
def request_context(correlation_id: str, request_id: str, trace_id: str) -> Iterator[None]:
    """Binds the request identifiers for the duration of the block."""
    correlation_token = correlation_id_var.set(correlation_id)
    request_token = request_id_var.set(request_id)
    trace_token = trace_id_var.set(trace_id)
    try:
        yield
    finally:
        correlation_id_var.reset(correlation_token)
        request_id_var.reset(request_token)
        trace_id_var.reset(trace_token)

def generate_correlation_id(prefix: str) -> str:
    """
    Generates a new correlation ID with a service-specific prefix.
    Args:
        prefix: A short code for the service (e.g., 'LDS').
    Returns:
        A formatted correlation ID string.
    """
    return f"{prefix}:{uuid.uuid4()}"
