# infrastructure/metrics/metrics.py
from prometheus_client import Counter

bbva_requests_total = Counter(
    "bbva_requests_total",
    "Requests sent to the BBVA API",
    ["endpoint"]  # login|sessions|products|movements
)

bbva_request_failures_total = Counter(
    "bbva_request_failures_total",
    "Failed requests to the BBVA API",
    ["endpoint"]
)
