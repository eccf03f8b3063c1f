# src/libs/dictionary-common/dictionary_common/monitoring.py
from prometheus_client import Counter, Histogram


# --------------------------------------------------------------------------------------
# Upstream (content repository) metrics
# --------------------------------------------------------------------------------------
UPSTREAM_RETRIEVAL_LATENCY_SECONDS = Histogram(
    "upstream_retrieval_latency_seconds",
    "Latency of content repository retrievals in seconds",
    labelnames=("source",),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)

UPSTREAM_RETRIEVAL_FAILURES_TOTAL = Counter(
    "upstream_retrieval_failures_total",
    "Number of failed content repository retrievals",
    labelnames=("source", "reason"),
)

def retrieval_timer(source: str):
    """
    Times an upstream retrieval.
    Usage:
        with retrieval_timer("catalog"):
            ...
    """
    return UPSTREAM_RETRIEVAL_LATENCY_SECONDS.labels(source=source).time()

# --------------------------------------------------------------------------------------
# Language pipeline metrics
# --------------------------------------------------------------------------------------
LANGUAGE_CATALOG_DUPLICATE_CODES_TOTAL = Counter(
    "language_catalog_duplicate_codes_total",
    "Number of duplicate language/country codes dropped from the catalog",
)

# --------------------------------------------------------------------------------------
# HTTP metrics
# --------------------------------------------------------------------------------------
HTTP_REQUEST_LATENCY_SECONDS = Histogram(
    "datasource_http_request_latency_seconds",
    "HTTP request latency in seconds",
    labelnames=("service", "method", "path"),
)

HTTP_REQUESTS_TOTAL = Counter(
    "datasource_http_requests_total",
    "Total number of HTTP requests",
    labelnames=("service", "method", "path", "status"),
)
