# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services, repositories and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "ritepath_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "ritepath_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "ritepath_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics ──
SMS_SENT = Counter(
    "ritepath_sms_sent_total",
    "Outbound SMS attempts by message kind and outcome",
    ["kind", "status"],
)
SMS_SEND_SECONDS = Histogram(
    "ritepath_sms_send_seconds",
    "Time spent waiting on the SMS provider per message",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
FANOUT_RECIPIENTS = Histogram(
    "ritepath_fanout_recipients",
    "Number of recipients per staff fan-out",
    buckets=[0, 1, 2, 5, 10, 25, 50],
)
WEBHOOK_EVENTS = Counter(
    "ritepath_webhook_events_total",
    "Inbound e-signature webhook events by type",
    ["event_type"],
)
CASE_LOOKUPS = Counter(
    "ritepath_case_lookups_total",
    "Case repository reads by operation and outcome",
    ["operation", "outcome"],
)
