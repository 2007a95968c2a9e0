"""
Exceptions raised by Perf Reporter.

Lifecycle hooks never raise; these surface only from configuration,
construction and the benchmark/dispatch helpers.
"""

from __future__ import annotations


class PerfReporterError(Exception):
    """Base class for all Perf Reporter errors."""
    pass


class UnknownReportSchemaError(PerfReporterError):
    """Raised when a report schema name has no registered formatter."""
    pass


class ScenarioFailed(PerfReporterError):
    """Raised when a benchmark scenario cannot set up its resources."""
    pass
