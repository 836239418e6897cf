"""Per-operation metrics collection and tracking.

Counts, total latency and errors for each tool operation. Latencies are in
milliseconds.
"""

import asyncio
import time
from dataclasses import dataclass

OPERATIONS = ("parse_path", "resolve")


@dataclass
class OperationMetrics:
    """Metrics for a single operation."""

    operation: str
    count: int = 0
    total_ms: float = 0.0  # sum of recorded durations
    errors: int = 0

    def avg_ms(self) -> float:
        """Calculate average latency in milliseconds."""
        return self.total_ms / self.count if self.count else 0.0

    def to_dict(self) -> dict:
        """Convert metrics to dictionary format.

        Returns:
            Dictionary representation of metrics suitable for JSON serialization
        """
        return {
            "operation": self.operation,
            "count": self.count,
            "avg_ms": self.avg_ms(),
            "errors": self.errors,
        }


class MetricsCollector:
    """Metrics collector shared by all tool calls.

    Uses asyncio.Lock for safe access in async context.
    """

    def __init__(self) -> None:
        self._metrics: dict[str, OperationMetrics] = {}
        self._start_time = time.time()
        self._lock = asyncio.Lock()

    async def record(self, operation: str, duration_ms: float, success: bool) -> None:
        """Record metrics for an operation.

        Args:
            operation: Operation name (parse_path, resolve)
            duration_ms: Duration in milliseconds
            success: Whether the operation succeeded

        Raises:
            ValueError: If operation is not a valid operation name
        """
        if operation not in OPERATIONS:
            raise ValueError(f"Invalid operation: {operation}")

        async with self._lock:
            metrics = self._metrics.setdefault(operation, OperationMetrics(operation))
            metrics.count += 1
            metrics.total_ms += duration_ms
            if not success:
                metrics.errors += 1

    def get_operation_metrics(self, operation: str) -> OperationMetrics | None:
        """Get metrics for an operation, None if it was never recorded."""
        return self._metrics.get(operation)

    def get_all_metrics(self) -> list[OperationMetrics]:
        """Get metrics for all operations with recorded activity."""
        return list(self._metrics.values())

    def uptime_seconds(self) -> float:
        """Time elapsed since collector initialization."""
        return time.time() - self._start_time


_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get singleton metrics collector (created on first call)."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


def reset_metrics_collector() -> None:
    """Reset cached metrics collector (for testing only)."""
    global _metrics_collector
    _metrics_collector = None
