"""Prometheus metrics for monitoring.

Tracks request latency, upstream platform calls, fetch outcomes
and scoring durations.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram, Info

# Application info
APP_INFO = Info("devradar_app", "Dev Radar application info")

# HTTP metrics
HTTP_REQUESTS_TOTAL = Counter(
    "devradar_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION = Histogram(
    "devradar_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Platform API metrics
PLATFORM_API_CALLS = Counter(
    "devradar_platform_api_calls_total",
    "Total upstream platform API calls",
    ["platform", "status"],
)

PLATFORM_API_DURATION = Histogram(
    "devradar_platform_api_duration_seconds",
    "Upstream platform API call duration",
    ["platform"],
)

PLATFORM_FETCH_OUTCOMES = Counter(
    "devradar_platform_fetch_total",
    "Platform adapter outcomes",
    ["platform", "outcome"],
)

# Aggregation & scoring
AGGREGATION_DURATION = Histogram(
    "devradar_aggregation_duration_seconds",
    "Concurrent multi-platform fetch duration",
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

SCORING_DURATION = Histogram(
    "devradar_scoring_duration_seconds",
    "Skill analysis duration",
)
