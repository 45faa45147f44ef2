"""
Prometheus Metrics for the bank account service.

This module defines all metrics exposed at the /metrics endpoint:

1. Resource Metrics - per-operation latency of the REST resources and
   counts of entity changes
2. HTTP Metrics - request counts and latencies for every endpoint
"""
import time
from functools import wraps
from typing import Callable

from prometheus_client import Counter, Histogram, Info

from bank_service.config import settings

# =============================================================================
# SERVICE INFO
# =============================================================================

SERVICE_INFO = Info(
    "bank_account_service",
    "Service information"
)
SERVICE_INFO.info({
    "version": "0.1.0",
    "service": settings.service_name,
})

# =============================================================================
# RESOURCE METRICS
# =============================================================================

# Histogram: Latency of each REST resource operation
RESOURCE_LATENCY = Histogram(
    "bank_account_resource_latency_seconds",
    "Time spent handling a bank account resource operation",
    ["operation"],  # create, update, list, get, delete
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Counter: Entity changes by action
ENTITY_CHANGES = Counter(
    "bank_account_changes_total",
    "Bank account changes persisted",
    ["action"]  # created, updated, deleted
)

# =============================================================================
# HTTP METRICS (Standard)
# =============================================================================

HTTP_REQUESTS = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

HTTP_REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def timed(operation: str) -> Callable:
    """
    Decorator recording the latency of a resource operation.

    The wrapped function keeps its signature, so it can still be used
    directly as a FastAPI route.

    Args:
        operation: Label value for the ``operation`` label
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                RESOURCE_LATENCY.labels(operation=operation).observe(
                    time.perf_counter() - start_time
                )
        return wrapper
    return decorator


def record_entity_change(action: str) -> None:
    """Record a persisted entity change (created, updated, deleted)."""
    ENTITY_CHANGES.labels(action=action).inc()


def record_http_request(method: str, endpoint: str, status: int, latency_seconds: float) -> None:
    """Record HTTP request count and latency."""
    HTTP_REQUESTS.labels(method=method, endpoint=endpoint, status=status).inc()
    HTTP_REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(latency_seconds)
