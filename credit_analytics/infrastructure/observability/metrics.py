"""Prometheus metrics for monitoring scoring volume, segment mix and ingestion quality"""

from typing import List
from prometheus_client import Counter, Histogram
from credit_analytics.domain.models import Customer

# Scoring metrics
customers_scored_counter = Counter(
    "analytics_customers_scored_total",
    "Customers run through the scoring pipeline",
    ["risk_category"],  # Low | Medium | High
)

segment_assignment_counter = Counter(
    "analytics_segment_assignments_total",
    "Customers assigned to each segment",
    ["segment"],  # Premium | Gold | Silver | Basic
)

fraud_suspects_counter = Counter(
    "analytics_fraud_suspects_total",
    "Customers flagged by anomaly screening",
)

# Ingestion metrics
csv_rows_dropped_counter = Counter(
    "ingestion_csv_rows_dropped_total",
    "CSV rows dropped because they could not be parsed",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_scoring(customers: List[Customer], fraud_suspect_count: int) -> None:
    """Record category and segment mix of a processed batch"""
    for customer in customers:
        customers_scored_counter.labels(risk_category=customer.risk_category).inc()
        segment_assignment_counter.labels(segment=customer.segment).inc()

    fraud_suspects_counter.inc(fraud_suspect_count)
