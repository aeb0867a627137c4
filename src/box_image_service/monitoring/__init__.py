"""Monitoring and metrics instrumentation for the Box Image Classification Service.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from box_image_service.monitoring.metrics import (
    backend_latency_seconds,
    classify_duration_seconds,
    classify_requests_total,
    signature_resolution_failures_total,
)

__all__ = [
    "classify_requests_total",
    "classify_duration_seconds",
    "backend_latency_seconds",
    "signature_resolution_failures_total",
]
