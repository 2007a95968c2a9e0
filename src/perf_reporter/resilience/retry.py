"""
Retry Settings - Exponential Backoff for Dispatched Calls.

Design Notes:
    - Delay grows by exponential_base per attempt, capped at max_delay
    - Only retryable_exceptions are retried; others fail immediately
"""

from __future__ import annotations

from dataclasses import dataclass

from perf_reporter.domain.exceptions import PerfReporterError


class RetryExhausted(PerfReporterError):
    """Raised when all retry attempts are exhausted."""
    pass


@dataclass
class RetryConfig:
    """Configuration for retry logic."""
    max_attempts: int = 3
    base_delay_seconds: float = 0.1
    max_delay_seconds: float = 5.0
    exponential_base: float = 2.0
    retryable_exceptions: tuple = (Exception,)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


def backoff_delay(config: RetryConfig, attempt: int) -> float:
    """Delay before the attempt following ``attempt`` (1-based)."""
    delay = config.base_delay_seconds * (config.exponential_base ** (attempt - 1))
    return min(delay, config.max_delay_seconds)
