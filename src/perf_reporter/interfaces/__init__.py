"""
Interfaces Layer - Abstract Protocols for Collaborators.

Protocols:
    - MonitoringInterface: Five call lifecycle hooks
    - ReportFormatter: Record list -> JSON document strategy
    - ObjectStore: Minimal object storage client used by benchmarks

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Interface Segregation: Small, focused interfaces
"""

from perf_reporter.interfaces.monitoring import MonitoringFactory, MonitoringInterface
from perf_reporter.interfaces.object_store import ObjectStore
from perf_reporter.interfaces.report_formatter import ReportFormatter

__all__ = [
    "MonitoringFactory",
    "MonitoringInterface",
    "ObjectStore",
    "ReportFormatter",
]
