"""
Prometheus metrics for the Gitea relay.

Counters for webhook deliveries that pass through the hook parser, the ones
that are ignored or fail to decode, and the builds produced from them.
"""

from prometheus_client import Counter


hooks_received_total = Counter(
    "gitea_relay_hooks_received_total",
    "Total number of webhooks handed to the hook parser",
    ["event_type"],  # event_type = push|create|pull_request|...
)

hooks_ignored_total = Counter(
    "gitea_relay_hooks_ignored_total",
    "Total number of webhooks that did not produce a build",
    ["event_type", "reason"],
)

hook_decode_errors_total = Counter(
    "gitea_relay_hook_decode_errors_total",
    "Total number of webhook bodies that could not be decoded",
    ["event_type", "error_type"],
)

builds_extracted_total = Counter(
    "gitea_relay_builds_extracted_total",
    "Total number of builds extracted from webhooks",
    ["event_kind"],  # event_kind = push|tag|pull_request
)


class MetricsContext:
    """Context manager counting the exceptions raised inside a block."""

    def __init__(self, error_counter, error_labels=None):
        self.error_counter = error_counter
        self.error_labels = error_labels or []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            error_type = exc_type.__name__
            self.error_counter.labels(*self.error_labels, error_type).inc()

        return False  # Don't suppress exceptions


def track_hook_decode(event_type: str):
    """Context manager for tracking webhook decode failures."""
    return MetricsContext(hook_decode_errors_total, error_labels=[event_type])
