"""
Perf Reporter - Request Latency Collection and JSON Reporting.

Observes the lifecycle of outbound service calls, turns the latency
reported by the transport into tagged metric records, and publishes
the collected records as a JSON report at shutdown.

Architecture:
    - Ports & Adapters (protocols in interfaces, implementations beside)
    - Dependency Injection for scenario context and formatting
    - Strategy Pattern for report schemas
    - Configuration-driven behavior via YAML

Main Components:
    - domain: Metric records, test context, call outcomes
    - interfaces: Monitoring, formatter and object store protocols
    - collector: Thread-safe metrics collector
    - reporting: JSON formatters and the stdout/file reporter
    - registry: Monitoring factory registration
    - dispatch: Instrumented call dispatcher firing lifecycle hooks
    - benchmark: Object store scenario matrix runner
    - config: Configuration models and loaders

Example:
    >>> from perf_reporter.collector import RequestMetricsCollector
    >>> with RequestMetricsCollector() as collector:
    ...     collector.set_test_context("64KB", "s3-standard")
    ...     collector.on_call_succeeded("S3", "PutObject", None, None, {"RequestLatency": 12.5})
"""

import logging
import sys

import structlog

__version__ = "0.4.0"


def configure_logging(
    level: int = logging.INFO,
    use_json: bool = False,
) -> None:
    """
    Configure structured logging for Perf Reporter.

    Call this at application startup to see log messages.

    Args:
        level: Logging level (default: INFO)
        use_json: Render log lines as JSON instead of console format

    Example:
        >>> import perf_reporter
        >>> perf_reporter.configure_logging(logging.DEBUG)
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # Logs go to stderr so stdout stays reserved for the report itself
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
