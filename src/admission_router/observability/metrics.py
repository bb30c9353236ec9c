"""
Prometheus metrics for the admission router.

This module provides metrics for handler registration and request dispatch.
Exposition over HTTP is left to the hosting server, which can serve
``generate_latest(get_metrics_registry())``.
"""

import logging
from collections import Counter as TypeCounter

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

# Dedicated registry so embedding servers keep control of the default one
_metrics_registry = CollectorRegistry()

DISPATCH_TOTAL = Counter(
    "admission_router_dispatch_total",
    "Total number of admission requests dispatched",
    ["webhook_type", "resource", "result"],
    registry=_metrics_registry,
)

DISPATCH_DURATION = Histogram(
    "admission_router_dispatch_duration_seconds",
    "Time spent selecting and running an admission handler",
    ["webhook_type", "resource"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=_metrics_registry,
)

REGISTERED_HANDLERS = Gauge(
    "admission_router_registered_handlers",
    "Number of registered admission handlers",
    ["webhook_type"],
    registry=_metrics_registry,
)

RESULT_HANDLED = "handled"
RESULT_NO_MATCH = "no_match"
RESULT_ERROR = "error"


def get_metrics_registry() -> CollectorRegistry:
    """Get the router metrics registry."""
    return _metrics_registry


class MetricsCollector:
    """Records router metrics, or nothing when disabled."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def record_dispatch(
        self, webhook_type: str, resource: str, result: str, duration: float
    ) -> None:
        """
        Record one dispatched admission request.

        Args:
            webhook_type: mutating or validating
            resource: Resource in group/version/plural form
            result: handled, no_match or error
            duration: Time spent in the dispatcher and handler, in seconds
        """
        if not self.enabled:
            return
        DISPATCH_TOTAL.labels(
            webhook_type=webhook_type, resource=resource, result=result
        ).inc()
        DISPATCH_DURATION.labels(webhook_type=webhook_type, resource=resource).observe(
            duration
        )

    def record_registered_handlers(self, webhook_types: list[str]) -> None:
        """Set the registered handler gauge from the registry's webhook types."""
        if not self.enabled:
            return
        counts = TypeCounter(webhook_types)
        for webhook_type in ("mutating", "validating"):
            REGISTERED_HANDLERS.labels(webhook_type=webhook_type).set(
                counts.get(webhook_type, 0)
            )
