"""
Instrumented Dispatcher - Host Side of the Monitoring Contract.

Runs one remote call with retries and fires the lifecycle hooks of every
attached monitor in the documented order:

    started -> [retried]* -> succeeded | failed -> finished

Design Notes:
    - Latency of the final attempt is reported under the latency key
    - Monitor failures are logged and never reach the call path
    - Non-retryable exceptions fail immediately and propagate unchanged
"""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable, List, Optional, TypeVar

import structlog

from perf_reporter.domain.entities import LATENCY_METRIC_KEY, CallOutcome
from perf_reporter.interfaces.monitoring import MonitoringInterface
from perf_reporter.resilience.retry import RetryConfig, RetryExhausted, backoff_delay

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ATTEMPTS_METRIC_KEY = "AttemptCount"


class InstrumentedDispatcher:
    """Executes calls and reports their lifecycle to monitors."""

    def __init__(
        self,
        monitors: Optional[Iterable[MonitoringInterface]] = None,
        retry_config: Optional[RetryConfig] = None,
        latency_metric_key: str = LATENCY_METRIC_KEY,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            monitors: Observers notified around every call
            retry_config: Retry and backoff settings
            latency_metric_key: Key used for latency in the metrics bag
            sleep: Sleep function (injectable for tests)
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self.monitors: List[MonitoringInterface] = list(monitors or [])
        self.retry_config = retry_config or RetryConfig()
        self.latency_metric_key = latency_metric_key
        self._sleep = sleep
        self._clock = clock

    def add_monitor(self, monitor: MonitoringInterface) -> None:
        self.monitors.append(monitor)

    def invoke(
        self,
        service_name: str,
        operation_name: str,
        func: Callable[[], T],
        request: Any = None,
    ) -> T:
        """
        Execute a call with retry and monitoring.

        Args:
            service_name: Service name reported to monitors
            operation_name: Operation name reported to monitors
            func: Zero-argument callable performing the call
            request: Opaque request object passed to monitors

        Returns:
            Result of the successful attempt

        Raises:
            RetryExhausted: When every attempt raised a retryable error
            Exception: Non-retryable errors from func, unchanged
        """
        tokens = [
            self._notify(m, "on_call_started", service_name, operation_name, request)
            for m in self.monitors
        ]
        max_attempts = self.retry_config.max_attempts

        try:
            for attempt in range(1, max_attempts + 1):
                if attempt > 1:
                    self._sleep(backoff_delay(self.retry_config, attempt - 1))
                    for monitor, token in zip(self.monitors, tokens):
                        self._notify(
                            monitor,
                            "on_call_retried",
                            service_name,
                            operation_name,
                            request,
                            token,
                        )

                started = self._clock()
                try:
                    result = func()
                except Exception as e:
                    metrics = self._core_metrics(started, attempt)
                    retryable = isinstance(e, self.retry_config.retryable_exceptions)

                    if retryable and attempt < max_attempts:
                        logger.warning(
                            "call_attempt_failed",
                            service=service_name,
                            operation=operation_name,
                            attempt=attempt,
                            max_attempts=max_attempts,
                            error=str(e),
                        )
                        continue

                    self._fire_terminal(
                        "on_call_failed",
                        service_name,
                        operation_name,
                        request,
                        CallOutcome.error(str(e)),
                        metrics,
                        tokens,
                    )
                    if not retryable:
                        raise
                    logger.error(
                        "call_failed",
                        service=service_name,
                        operation=operation_name,
                        attempts=attempt,
                        error=str(e),
                    )
                    raise RetryExhausted(
                        f"{service_name}.{operation_name} failed after "
                        f"{attempt} attempts"
                    ) from e

                self._fire_terminal(
                    "on_call_succeeded",
                    service_name,
                    operation_name,
                    request,
                    CallOutcome.ok(),
                    self._core_metrics(started, attempt),
                    tokens,
                )
                return result
        finally:
            for monitor, token in zip(self.monitors, tokens):
                self._notify(
                    monitor,
                    "on_call_finished",
                    service_name,
                    operation_name,
                    request,
                    token,
                )

        # max_attempts >= 1 guarantees the loop returns or raises
        raise AssertionError("unreachable")

    def _core_metrics(self, started: float, attempt: int) -> dict:
        elapsed_ms = (self._clock() - started) * 1000.0
        return {
            self.latency_metric_key: elapsed_ms,
            ATTEMPTS_METRIC_KEY: float(attempt),
        }

    def _fire_terminal(
        self,
        hook: str,
        service_name: str,
        operation_name: str,
        request: Any,
        outcome: CallOutcome,
        metrics: dict,
        tokens: List[Any],
    ) -> None:
        for monitor, token in zip(self.monitors, tokens):
            self._notify(
                monitor,
                hook,
                service_name,
                operation_name,
                request,
                outcome,
                metrics,
                token,
            )

    @staticmethod
    def _notify(monitor: MonitoringInterface, hook: str, *args: Any) -> Any:
        try:
            return getattr(monitor, hook)(*args)
        except Exception:
            logger.exception(
                "monitor_hook_failed",
                monitor=type(monitor).__name__,
                hook=hook,
            )
            return None
