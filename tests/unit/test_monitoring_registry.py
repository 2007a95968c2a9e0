"""
Unit Tests for MonitoringRegistry.

Test Aspects Covered:
    ✅ Business Logic: Register, create, shutdown
    ✅ Error Handling: Duplicate names, failing close
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from perf_reporter.collector.metrics_collector import RequestMetricsCollector
from perf_reporter.registry.monitoring_registry import MonitoringRegistry
from perf_reporter.reporting.json_reporter import JsonReporter


class TestMonitoringRegistry:
    """Test cases for MonitoringRegistry."""

    def test_create_instances_in_registration_order(self) -> None:
        registry = MonitoringRegistry()
        first, second = Mock(name="first"), Mock(name="second")
        registry.register("a", lambda: first)
        registry.register("b", lambda: second)

        instances = registry.create_instances()

        assert instances == [first, second]
        assert registry.instances == [first, second]
        assert registry.list_factories() == ["a", "b"]

    def test_duplicate_name_rejected(self) -> None:
        registry = MonitoringRegistry()
        registry.register("json", Mock)

        with pytest.raises(ValueError, match="already registered"):
            registry.register("json", Mock)

    def test_unregister(self) -> None:
        registry = MonitoringRegistry()
        registry.register("json", Mock)

        assert registry.unregister("json") is True
        assert registry.unregister("json") is False
        assert registry.create("json") is None

    def test_shutdown_flushes_collectors(self, report_path: Path, capsys) -> None:
        """
        SCENARIO: Collector created from a factory records one call
        EXPECTED: shutdown() writes its report and forgets the instance
        """
        # Arrange
        registry = MonitoringRegistry()
        registry.register(
            "json",
            lambda: RequestMetricsCollector(reporter=JsonReporter(output_path=report_path)),
        )
        monitor = registry.create("json")
        monitor.on_call_succeeded("S3", "PutObject", None, None, {"RequestLatency": 2.0})

        # Act
        closed = registry.shutdown()

        # Assert
        assert closed == 1
        assert registry.instances == []
        assert json.loads(report_path.read_text())["results"][0]["name"] == (
            "s3.putobject.latency"
        )

    def test_shutdown_continues_after_close_failure(self) -> None:
        registry = MonitoringRegistry()
        broken = Mock()
        broken.close.side_effect = RuntimeError("disk full")
        healthy = Mock()
        registry.register("broken", lambda: broken)
        registry.register("healthy", lambda: healthy)
        registry.create_instances()

        closed = registry.shutdown()

        assert closed == 1
        healthy.close.assert_called_once()

    def test_instances_without_close_skipped(self) -> None:
        registry = MonitoringRegistry()
        registry.register("plain", lambda: object())
        registry.create_instances()

        assert registry.shutdown() == 0
