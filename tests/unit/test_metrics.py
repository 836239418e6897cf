"""Tests for metrics collection infrastructure."""

import asyncio

import pytest

from uripath_mcp.metrics import (
    MetricsCollector,
    OperationMetrics,
    get_metrics_collector,
    reset_metrics_collector,
)


@pytest.fixture
def metrics_collector():
    """Create a fresh metrics collector for each test."""
    return MetricsCollector()


class TestOperationMetrics:
    """Test OperationMetrics data structure."""

    def test_initialization(self):
        """Test OperationMetrics initializes with zeros."""
        metrics = OperationMetrics(operation="resolve")
        assert metrics.count == 0
        assert metrics.total_ms == 0.0
        assert metrics.errors == 0

    def test_avg_ms_empty(self):
        """Test average latency with no data."""
        assert OperationMetrics(operation="resolve").avg_ms() == 0.0

    def test_avg_ms_with_data(self):
        """Test average latency calculation."""
        metrics = OperationMetrics(operation="resolve", count=3, total_ms=6.0)
        assert metrics.avg_ms() == 2.0

    def test_to_dict(self):
        """Test dictionary conversion."""
        metrics = OperationMetrics(operation="parse_path", count=2, total_ms=4.0, errors=1)
        assert metrics.to_dict() == {
            "operation": "parse_path",
            "count": 2,
            "avg_ms": 2.0,
            "errors": 1,
        }


class TestMetricsCollector:
    """Test MetricsCollector class."""

    @pytest.mark.asyncio
    async def test_record_success(self, metrics_collector):
        """Test recording a successful operation."""
        await metrics_collector.record("resolve", 1.5, success=True)

        metrics = metrics_collector.get_operation_metrics("resolve")
        assert metrics is not None
        assert metrics.count == 1
        assert metrics.total_ms == 1.5
        assert metrics.errors == 0

    @pytest.mark.asyncio
    async def test_record_failure(self, metrics_collector):
        """Test recording a failed operation counts an error."""
        await metrics_collector.record("parse_path", 0.5, success=False)

        metrics = metrics_collector.get_operation_metrics("parse_path")
        assert metrics is not None
        assert metrics.errors == 1

    @pytest.mark.asyncio
    async def test_record_invalid_operation(self, metrics_collector):
        """Test unknown operation names are rejected."""
        with pytest.raises(ValueError, match="Invalid operation"):
            await metrics_collector.record("hover", 1.0, success=True)

    @pytest.mark.asyncio
    async def test_concurrent_records(self, metrics_collector):
        """Test concurrent records are all counted."""
        await asyncio.gather(
            *(metrics_collector.record("resolve", 1.0, success=True) for _ in range(50))
        )
        assert metrics_collector.get_operation_metrics("resolve").count == 50

    @pytest.mark.asyncio
    async def test_average_from_running_total(self, metrics_collector):
        """Test the average is kept without storing every duration."""
        for duration in (1.0, 2.0, 6.0):
            await metrics_collector.record("resolve", duration, success=True)

        metrics = metrics_collector.get_operation_metrics("resolve")
        assert metrics.total_ms == 9.0
        assert metrics.avg_ms() == 3.0
        assert not hasattr(metrics, "times")

    @pytest.mark.asyncio
    async def test_get_all_metrics(self, metrics_collector):
        """Test all recorded operations are listed."""
        await metrics_collector.record("resolve", 1.0, success=True)
        await metrics_collector.record("parse_path", 1.0, success=True)

        operations = {m.operation for m in metrics_collector.get_all_metrics()}
        assert operations == {"resolve", "parse_path"}

    def test_unknown_operation_metrics_is_none(self, metrics_collector):
        """Test operations without activity return None."""
        assert metrics_collector.get_operation_metrics("resolve") is None

    def test_uptime_non_negative(self, metrics_collector):
        """Test uptime is measured from creation."""
        assert metrics_collector.uptime_seconds() >= 0.0


class TestSingleton:
    """Tests for the collector singleton."""

    def test_get_metrics_collector_caches(self):
        """Test the same collector is returned until reset."""
        first = get_metrics_collector()
        assert get_metrics_collector() is first

        reset_metrics_collector()
        assert get_metrics_collector() is not first
