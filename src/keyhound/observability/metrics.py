"""
Metrics collection for Keyhound.

Provides metrics collection for monitoring scan volume, duration and
the number and kind of secrets found. Metric tags never carry secret
values or contexts.
"""

from __future__ import annotations

import os
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterator


class MetricType(Enum):
    """Types of metrics."""

    COUNTER = "counter"  # Monotonically increasing value
    GAUGE = "gauge"  # Value that can go up or down
    TIMER = "timer"  # Duration measurements


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MetricValue:
    """A single metric value."""

    name: str
    value: float
    metric_type: MetricType
    timestamp: datetime = field(default_factory=_utcnow)
    tags: dict[str, str] = field(default_factory=dict)
    unit: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "value": self.value,
            "type": self.metric_type.value,
            "timestamp": self.timestamp.isoformat(),
            "tags": self.tags,
            "unit": self.unit,
        }


class MetricsBackend(ABC):
    """Abstract base class for metrics backends."""

    @abstractmethod
    def record(self, metric: MetricValue) -> None:
        """Record a metric value."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered metrics."""
        pass


class InMemoryMetricsBackend(MetricsBackend):
    """
    In-memory metrics backend for testing and local development.

    Stores metrics in memory and provides query methods.
    """

    def __init__(self, max_size: int = 10000):
        """
        Initialize in-memory backend.

        Args:
            max_size: Maximum number of metrics to store
        """
        self.max_size = max_size
        self.metrics: list[MetricValue] = []
        self._lock = threading.Lock()

    def record(self, metric: MetricValue) -> None:
        """Record a metric value."""
        with self._lock:
            self.metrics.append(metric)
            if len(self.metrics) > self.max_size:
                del self.metrics[: len(self.metrics) - self.max_size]

    def flush(self) -> None:
        """No-op for in-memory backend."""
        pass

    def get_metrics(
        self,
        name: str | None = None,
        since: datetime | None = None,
    ) -> list[MetricValue]:
        """
        Query stored metrics.

        Args:
            name: Filter by metric name
            since: Filter by timestamp

        Returns:
            List of matching metrics
        """
        with self._lock:
            snapshot = list(self.metrics)

        result = []
        for metric in snapshot:
            if name and metric.name != name:
                continue
            if since and metric.timestamp < since:
                continue
            result.append(metric)
        return result

    def clear(self) -> None:
        """Clear all stored metrics."""
        with self._lock:
            self.metrics.clear()


class NullMetricsBackend(MetricsBackend):
    """Backend that discards every metric."""

    def record(self, metric: MetricValue) -> None:
        pass

    def flush(self) -> None:
        pass


class KeyhoundMetrics:
    """
    High-level metrics collection for Keyhound.

    Provides convenient methods for recording common metrics.
    """

    def __init__(self, backend: MetricsBackend | None = None):
        """
        Initialize metrics collector.

        Args:
            backend: Metrics backend (default: InMemoryMetricsBackend)
        """
        self.backend = backend or InMemoryMetricsBackend()
        self._default_tags: dict[str, str] = {}

    def set_default_tags(self, **tags: str) -> None:
        """Set default tags for all metrics."""
        self._default_tags.update(tags)

    def _record(
        self,
        name: str,
        value: float,
        metric_type: MetricType,
        unit: str = "",
        **tags: str,
    ) -> None:
        all_tags = {**self._default_tags, **tags}
        metric = MetricValue(
            name=name,
            value=value,
            metric_type=metric_type,
            unit=unit,
            tags=all_tags,
        )
        self.backend.record(metric)

    def counter(self, name: str, value: float = 1, **tags: str) -> None:
        """
        Increment a counter.

        Args:
            name: Metric name
            value: Increment value (default: 1)
            **tags: Additional tags
        """
        self._record(name, value, MetricType.COUNTER, "count", **tags)

    def gauge(self, name: str, value: float, unit: str = "", **tags: str) -> None:
        """
        Set a gauge value.

        Args:
            name: Metric name
            value: Current value
            unit: Unit of measurement
            **tags: Additional tags
        """
        self._record(name, value, MetricType.GAUGE, unit, **tags)

    def timing(self, name: str, duration_seconds: float, **tags: str) -> None:
        """
        Record a timing measurement.

        Args:
            name: Metric name
            duration_seconds: Duration in seconds
            **tags: Additional tags
        """
        self._record(name, duration_seconds, MetricType.TIMER, "seconds", **tags)

    @contextmanager
    def timer(self, name: str, **tags: str) -> Iterator[None]:
        """
        Context manager for timing a block of code.

        Args:
            name: Metric name
            **tags: Additional tags

        Yields:
            None
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            self.timing(name, duration, **tags)

    # Scan metrics

    def scan_completed(
        self,
        duration_seconds: float,
        secret_count: int,
        risk_score: int,
    ) -> None:
        """Record scan completion."""
        self.counter("scans.completed")
        self.timing("scans.duration", duration_seconds)
        self.gauge("scans.secret_count", secret_count)
        self.gauge("scans.risk_score", risk_score)

    def scan_rejected(self, error_type: str = "unknown") -> None:
        """Record a scan refused before it ran."""
        self.counter("scans.rejected", error_type=error_type)

    # Secret metrics

    def secrets_by_type(self, counts: dict[str, int]) -> None:
        """Record secret counts by type."""
        for secret_type, count in counts.items():
            self.gauge("secrets.count", count, secret_type=secret_type)

    def flush(self) -> None:
        """Flush any buffered metrics."""
        self.backend.flush()


# Global metrics instance
_metrics: KeyhoundMetrics | None = None


def get_metrics() -> KeyhoundMetrics:
    """
    Get the global metrics instance.

    Returns:
        KeyhoundMetrics instance
    """
    global _metrics
    if _metrics is None:
        backend_type = os.getenv("KEYHOUND_METRICS_BACKEND", "memory")
        if backend_type == "none":
            backend: MetricsBackend = NullMetricsBackend()
        else:
            backend = InMemoryMetricsBackend()
        _metrics = KeyhoundMetrics(backend=backend)
    return _metrics


def configure_metrics(backend: MetricsBackend) -> KeyhoundMetrics:
    """
    Configure the global metrics instance.

    Args:
        backend: Metrics backend to use

    Returns:
        Configured KeyhoundMetrics instance
    """
    global _metrics
    _metrics = KeyhoundMetrics(backend=backend)
    return _metrics
