"""
Unit Tests for InstrumentedDispatcher.

Test Aspects Covered:
    ✅ Business Logic: Hook order, latency measurement, retries
    ✅ Error Handling: Exhausted retries, non-retryable errors,
       failing monitors
"""

from __future__ import annotations

from typing import List
from unittest.mock import Mock

import pytest

from perf_reporter.collector.metrics_collector import RequestMetricsCollector
from perf_reporter.dispatch.call_dispatcher import InstrumentedDispatcher
from perf_reporter.resilience.retry import RetryConfig, RetryExhausted, backoff_delay


def fake_clock(*readings: float):
    """Clock returning the given readings in order."""
    return iter(readings).__next__


def hook_names(monitor: Mock) -> List[str]:
    return [c[0] for c in monitor.method_calls]


class FlakyCall:
    """Raises ConnectionError for the first ``failures`` calls."""

    def __init__(self, failures: int, result: str = "ok") -> None:
        self.failures = failures
        self.result = result
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"attempt {self.calls} failed")
        return self.result


@pytest.fixture
def no_sleep() -> Mock:
    return Mock()


class TestHookOrder:
    """Test the lifecycle contract."""

    def test_success_hooks(self, no_sleep) -> None:
        """
        SCENARIO: Call succeeds on the first attempt
        EXPECTED: started, succeeded, finished with measured latency
        """
        # Arrange
        monitor = Mock()
        dispatcher = InstrumentedDispatcher(
            [monitor], sleep=no_sleep, clock=fake_clock(1.0, 1.25)
        )

        # Act
        result = dispatcher.invoke("S3", "PutObject", lambda: "etag")

        # Assert
        assert result == "etag"
        assert hook_names(monitor) == [
            "on_call_started",
            "on_call_succeeded",
            "on_call_finished",
        ]
        args = monitor.on_call_succeeded.call_args[0]
        assert args[:2] == ("S3", "PutObject")
        assert args[3].success is True
        assert args[4]["RequestLatency"] == pytest.approx(250.0)
        assert args[5] is monitor.on_call_started.return_value
        no_sleep.assert_not_called()

    def test_retry_hooks(self, no_sleep) -> None:
        """
        SCENARIO: Call fails twice then succeeds, 3 attempts allowed
        EXPECTED: Two retried hooks before the single succeeded hook
        """
        monitor = Mock()
        dispatcher = InstrumentedDispatcher(
            [monitor],
            retry_config=RetryConfig(max_attempts=3, base_delay_seconds=0.5),
            sleep=no_sleep,
        )

        result = dispatcher.invoke("S3", "GetObject", FlakyCall(failures=2))

        assert result == "ok"
        assert hook_names(monitor) == [
            "on_call_started",
            "on_call_retried",
            "on_call_retried",
            "on_call_succeeded",
            "on_call_finished",
        ]
        assert monitor.on_call_succeeded.call_args[0][4]["AttemptCount"] == 3.0
        assert [c.args[0] for c in no_sleep.call_args_list] == [0.5, 1.0]

    def test_exhausted_retries(self, no_sleep) -> None:
        """
        SCENARIO: Every attempt fails
        EXPECTED: failed + finished hooks, RetryExhausted chained to last error
        """
        monitor = Mock()
        dispatcher = InstrumentedDispatcher(
            [monitor], retry_config=RetryConfig(max_attempts=2), sleep=no_sleep
        )

        with pytest.raises(RetryExhausted) as exc_info:
            dispatcher.invoke("S3", "PutObject", FlakyCall(failures=5))

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert hook_names(monitor) == [
            "on_call_started",
            "on_call_retried",
            "on_call_failed",
            "on_call_finished",
        ]
        outcome = monitor.on_call_failed.call_args[0][3]
        assert outcome.success is False
        assert "attempt 2 failed" in outcome.error_message

    def test_non_retryable_error_propagates(self, no_sleep) -> None:
        """
        SCENARIO: Error type outside retryable_exceptions
        EXPECTED: Original error raised after one attempt, no retry hook
        """
        monitor = Mock()
        dispatcher = InstrumentedDispatcher(
            [monitor],
            retry_config=RetryConfig(max_attempts=3, retryable_exceptions=(ConnectionError,)),
            sleep=no_sleep,
        )

        def bad_request() -> None:
            raise ValueError("bad bucket name")

        with pytest.raises(ValueError, match="bad bucket name"):
            dispatcher.invoke("S3", "CreateBucket", bad_request)

        assert hook_names(monitor) == [
            "on_call_started",
            "on_call_failed",
            "on_call_finished",
        ]


class TestMonitorIsolation:
    """Test that monitor failures never affect the call."""

    def test_failing_monitor_does_not_break_call(self, no_sleep) -> None:
        broken = Mock()
        broken.on_call_succeeded.side_effect = RuntimeError("observer bug")
        healthy = Mock()
        dispatcher = InstrumentedDispatcher([broken, healthy], sleep=no_sleep)

        result = dispatcher.invoke("S3", "PutObject", lambda: 42)

        assert result == 42
        healthy.on_call_succeeded.assert_called_once()
        healthy.on_call_finished.assert_called_once()

    def test_no_monitors(self, no_sleep) -> None:
        dispatcher = InstrumentedDispatcher(sleep=no_sleep)

        assert dispatcher.invoke("S3", "PutObject", lambda: "x") == "x"


class TestWithCollector:
    """Test the dispatcher feeding a real collector."""

    def test_records_and_retry_counts(self, reporter, no_sleep) -> None:
        """
        SCENARIO: One call retried once, then succeeds
        EXPECTED: One successful record, one retry counted
        """
        # Arrange
        collector = RequestMetricsCollector(reporter=reporter)
        dispatcher = InstrumentedDispatcher(
            [collector],
            retry_config=RetryConfig(max_attempts=2),
            sleep=no_sleep,
            clock=fake_clock(0.0, 0.0, 10.0, 10.002),
        )

        # Act
        dispatcher.invoke("S3", "PutObject", FlakyCall(failures=1))

        # Assert
        (record,) = collector.records
        assert record.success is True
        assert record.measurements[0] == pytest.approx(2.0)
        assert collector.retry_counts() == {"s3.putobject.latency": 1}


class TestRetryConfig:
    """Test backoff settings."""

    def test_backoff_capped(self) -> None:
        config = RetryConfig(base_delay_seconds=1.0, max_delay_seconds=3.0)

        assert [backoff_delay(config, n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 3.0, 3.0]

    def test_max_attempts_validated(self) -> None:
        with pytest.raises(ValueError):
            RetryConfig(max_attempts=0)
