"""Prometheus metrics definitions."""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

tool_calls_total = Counter(
    "assistant_tool_calls_total",
    "Tool invocations requested by the reasoning engine",
    labelnames=["tool", "outcome"],
)

engine_calls_total = Counter(
    "assistant_engine_calls_total",
    "Reasoning engine completions",
    labelnames=["phase", "outcome"],
)

store_query_duration = Histogram(
    "assistant_store_query_duration_seconds",
    "Duration of alert store queries in seconds",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
