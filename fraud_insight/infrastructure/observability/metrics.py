"""Prometheus metrics for snapshot fetches, view renders and request latency"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from fraud_insight.domain.models import Decision

# Snapshot fetch metrics
fetch_failures_counter = Counter(
    "fraud_insight_fetch_failures_total",
    "Failed snapshot fetches from the statistics service",
    ["view"],  # dashboard | timeline | analysis | customer
)

stale_responses_counter = Counter(
    "fraud_insight_stale_responses_total",
    "Fetch responses discarded because a newer fetch had already been applied",
    ["view"],
)

api_request_histogram = Histogram(
    "statistics_api_request_seconds",
    "Statistics service response time",
    ["method"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# View metrics
decisions_rendered_counter = Counter(
    "fraud_insight_decisions_rendered_total",
    "Transactions rendered on the timeline by classified decision",
    ["decision"],  # APPROVE | REVIEW | BLOCK | UNKNOWN
)

render_duration_histogram = Histogram(
    "fraud_insight_render_seconds",
    "Time to recompute a derived view from its snapshot",
    ["view"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decisions(decisions: Iterable[Decision]) -> None:
    """Count rendered decisions for monitoring the approve/review/block mix"""
    for decision in decisions:
        decisions_rendered_counter.labels(decision=decision.value).inc()
