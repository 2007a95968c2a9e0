"""
Resilience Package - Retry with Exponential Backoff.

    - RetryConfig: Attempts and backoff settings
    - RetryExhausted: Raised when every attempt failed
"""

from perf_reporter.resilience.retry import RetryConfig, RetryExhausted, backoff_delay

__all__ = ["RetryConfig", "RetryExhausted", "backoff_delay"]
