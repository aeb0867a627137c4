"""Custom Prometheus metrics for the Box Image Classification Service.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- classify_requests_total (rate of non-OK codes)
- signature_resolution_failures_total (any increase means the model cannot be served)
- backend_latency_seconds (backend slowness shows up here before in callers)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

classify_requests_total = Counter(
    "classify_requests_total",
    "Total Classify calls by transport and result code",
    ["transport", "code"],
)
"""
Classify calls counter.

Labels:
- transport: http, grpc
- code: OK or the error code returned to the caller (INVALID_ARGUMENT, INTERNAL, ...)

Alert thresholds:
- WARN: INTERNAL rate > 1% of total requests
- CRITICAL: INTERNAL rate > 5% of total requests
"""

classify_duration_seconds = Histogram(
    "classify_duration_seconds",
    "Classify call duration in seconds",
    ["transport"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# === Backend Metrics ===

backend_latency_seconds = Histogram(
    "backend_latency_seconds",
    "Inference backend execution latency in seconds",
    ["model", "success"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
"""
Backend execution latency histogram.

Labels:
- model: Model name served by the backend
- success: true (outputs returned), false (backend reported an error)
"""

# === Configuration Metrics ===

signature_resolution_failures_total = Counter(
    "signature_resolution_failures_total",
    "Classification signature resolution failures at service construction",
)
"""
Incremented once per ClassificationService constructed with an unresolvable
signature. Every Classify call fails until the process restarts with a
valid model, so any increase should page.
"""
