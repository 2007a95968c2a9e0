"""
Reporting Package - JSON Report Formatting and Publishing.

    - ResultsFormatter: Canonical schema with provenance and a "results" list
    - PerfResultsFormatter: Flat {name, durationMs, success} schema
    - JsonReporter: Publishes a formatted report to stdout and a file
"""

from perf_reporter.reporting.formatters import (
    PerfResultsFormatter,
    ResultsFormatter,
    available_schemas,
    get_formatter,
)
from perf_reporter.reporting.json_reporter import JsonReporter

__all__ = [
    "JsonReporter",
    "PerfResultsFormatter",
    "ResultsFormatter",
    "available_schemas",
    "get_formatter",
]
