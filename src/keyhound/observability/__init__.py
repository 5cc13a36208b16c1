"""
Observability for Keyhound.

Provides logging and metrics for monitoring scan volume and performance.
"""

from keyhound.observability.logging import (
    HumanReadableFormatter,
    KeyhoundLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
)
from keyhound.observability.metrics import (
    InMemoryMetricsBackend,
    KeyhoundMetrics,
    MetricsBackend,
    MetricType,
    MetricValue,
    NullMetricsBackend,
    configure_metrics,
    get_metrics,
)

__all__ = [
    # Logging
    "HumanReadableFormatter",
    "KeyhoundLogger",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    # Metrics
    "InMemoryMetricsBackend",
    "KeyhoundMetrics",
    "MetricsBackend",
    "MetricType",
    "MetricValue",
    "NullMetricsBackend",
    "configure_metrics",
    "get_metrics",
]
