"""
Prometheus metrics for the license inventory.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["license_type"],
)

licenses_deleted_total = Counter(
    "licenses_deleted_total",
    "Total licenses deleted",
)

seats_reconciled_total = Counter(
    "seats_reconciled_total",
    "Seats created or deleted by reconciliation",
    ["operation"],
)

# Assignment metrics
assignments_total = Counter(
    "assignments_total",
    "Assignments created or returned",
    ["action"],
)

# Import metrics
csv_imports_total = Counter(
    "csv_imports_total",
    "CSV imports by type and outcome",
    ["type", "outcome"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
