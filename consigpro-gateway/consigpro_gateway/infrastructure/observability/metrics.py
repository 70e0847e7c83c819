"""Prometheus metrics for monitoring analyses, negative margins, and extraction performance"""

from typing import Iterable
from prometheus_client import Counter, Histogram

# Analysis metrics
analysis_counter = Counter(
    "consigpro_analysis_total",
    "Total document analyses requested",
    ["outcome"],  # completed | failed | superseded | rejected
)

negative_margin_counter = Counter(
    "consigpro_negative_margin_total",
    "Analyses where a margin category came out negative",
    ["category"],  # loan | credit_card | benefit_card
)

# Extraction service metrics
extraction_latency_histogram = Histogram(
    "extraction_latency_seconds",
    "Document extraction service response time",
    buckets=[1.0, 2.5, 5.0, 10.0, 20.0, 40.0, 80.0, 120.0],
)

extraction_failures_counter = Counter(
    "extraction_failures_total",
    "Failed document extraction calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(outcome: str, negative_categories: Iterable[str] = ()) -> None:
    """Record analysis outcome and which categories ended up over the limit"""
    analysis_counter.labels(outcome=outcome).inc()

    for category in negative_categories:
        negative_margin_counter.labels(category=category).inc()
