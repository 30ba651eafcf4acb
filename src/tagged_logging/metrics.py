"""Prometheus metrics for tagged-logging."""

from prometheus_client import Counter, Gauge, generate_latest

from .config import config

# Tag stack activity
TAGS_PUSHED = Counter(
    "tagged_logging_tags_pushed_total",
    "Total tags pushed onto context stacks",
)
TAGS_POPPED = Counter(
    "tagged_logging_tags_popped_total",
    "Total tags popped from context stacks",
)

# Active tagged() scopes across all contexts
ACTIVE_SCOPES = Gauge(
    "tagged_logging_active_scopes",
    "Currently open tagged scopes",
)

# Lines handed to wrapped sinks
LINES = Counter(
    "tagged_logging_lines_total",
    "Total log lines forwarded to sinks",
    ["level"],
)

FLUSHES = Counter(
    "tagged_logging_flushes_total",
    "Total flushes through tagged loggers",
)


def enabled() -> bool:
    return config.metrics_enabled


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()
