"""
Domain Layer - Metric Records and Run Context.

Entities:
    - MetricRecord: One latency observation for one service call
    - Dimension: Categorical (name, value) tag on a record
    - CallOutcome: Terminal outcome of a call as seen by the observer

Value Objects:
    - TestContext: Run-level labels applied to new records
    - ReportProvenance: Static fields describing the producing toolchain

Design Principles:
    - Immutable (frozen Pydantic models)
    - Invariants validated at construction
    - No infrastructure dependencies
"""

from perf_reporter.domain.entities import (
    LATENCY_METRIC_KEY,
    UNIT_MILLISECONDS,
    CallOutcome,
    CoreMetrics,
    Dimension,
    MetricRecord,
    metric_name,
)
from perf_reporter.domain.value_objects import ReportProvenance, TestContext

__all__ = [
    "LATENCY_METRIC_KEY",
    "UNIT_MILLISECONDS",
    "CallOutcome",
    "CoreMetrics",
    "Dimension",
    "MetricRecord",
    "ReportProvenance",
    "TestContext",
    "metric_name",
]
