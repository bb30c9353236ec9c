"""
Observability utilities for the admission router.

This module provides metrics and structured logging capabilities for
production monitoring and troubleshooting.
"""

from .logging import configure_logging, setup_structured_logging
from .metrics import MetricsCollector, get_metrics_registry

__all__ = [
    "MetricsCollector",
    "configure_logging",
    "get_metrics_registry",
    "setup_structured_logging",
]
