"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from perf_reporter import configure_logging
from perf_reporter.collector.metrics_collector import RequestMetricsCollector
from perf_reporter.collector.scenario_context import ScenarioContext
from perf_reporter.domain.entities import LATENCY_METRIC_KEY
from perf_reporter.reporting.json_reporter import JsonReporter


@pytest.fixture(autouse=True)
def stderr_logging():
    """Keep log lines off stdout, which carries the report."""
    configure_logging(logging.WARNING)
    yield


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def report_path(tmp_path: Path) -> Path:
    """Report file inside the test's temp directory."""
    return tmp_path / "perf-results.json"


@pytest.fixture
def scenario_context() -> ScenarioContext:
    """Fresh scenario context per test."""
    return ScenarioContext()


@pytest.fixture
def reporter(report_path: Path) -> JsonReporter:
    """Reporter writing to the temp report path."""
    return JsonReporter(output_path=report_path)


@pytest.fixture
def collector(
    reporter: JsonReporter,
    scenario_context: ScenarioContext,
) -> RequestMetricsCollector:
    """Collector recording every operation."""
    return RequestMetricsCollector(reporter=reporter, context=scenario_context)


@pytest.fixture
def latency():
    """Build a core metrics bag with a latency value."""

    def _latency(ms: float) -> dict:
        return {LATENCY_METRIC_KEY: ms}

    return _latency
