"""
Collector Package - Call Observation and Record Accumulation.

    - RequestMetricsCollector: Lifecycle hooks -> tagged latency records
    - ScenarioContext: Injectable run-level labels (size, bucket type)
    - OperationFilter: Which operations are recorded
"""

from perf_reporter.collector.metrics_collector import RequestMetricsCollector
from perf_reporter.collector.operation_filter import OperationFilter
from perf_reporter.collector.scenario_context import ScenarioContext

__all__ = [
    "OperationFilter",
    "RequestMetricsCollector",
    "ScenarioContext",
]
