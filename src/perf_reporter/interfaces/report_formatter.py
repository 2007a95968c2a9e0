"""
Report Formatter Protocol.

A formatter turns the accumulated record list into one JSON-serializable
document. Each formatter owns exactly one output schema.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from perf_reporter.domain.entities import MetricRecord


@runtime_checkable
class ReportFormatter(Protocol):
    """Serialization strategy for a list of metric records."""

    schema_name: str

    def format(self, records: Sequence[MetricRecord]) -> Dict[str, Any]:
        """
        Build the report document.

        Args:
            records: Records in recording order

        Returns:
            JSON-serializable dict
        """
        ...
