"""
Report Formatters - One Class per Output Schema.

Two schemas exist for the same record list:

    results (canonical):
        {"productId", "sdkVersion", "commitId",
         "results": [{"name", "description", "unit", "date",
                      "dimensions"?, "measurements"}]}

    perf-results:
        {"perf-results": [{"name", "durationMs", "success"}]}

Design Notes:
    - Key order inside each record is fixed; json.dumps keeps dict order
    - "dimensions" is omitted when a record has none
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence

from perf_reporter.domain.entities import MetricRecord
from perf_reporter.domain.exceptions import UnknownReportSchemaError
from perf_reporter.domain.value_objects import ReportProvenance


class ResultsFormatter:
    """Canonical schema: provenance fields plus a "results" list."""

    schema_name = "results"

    def __init__(self, provenance: Optional[ReportProvenance] = None) -> None:
        self.provenance = provenance or ReportProvenance()

    def format(self, records: Sequence[MetricRecord]) -> Dict[str, Any]:
        return {
            "productId": self.provenance.product_id,
            "sdkVersion": self.provenance.sdk_version,
            "commitId": self.provenance.commit_id,
            "results": [self.format_record(r) for r in records],
        }

    @staticmethod
    def format_record(record: MetricRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "name": record.name,
            "description": record.description,
            "unit": record.unit,
            "date": record.timestamp,
        }
        if record.dimensions:
            entry["dimensions"] = [
                {"name": d.name, "value": d.value} for d in record.dimensions
            ]
        entry["measurements"] = list(record.measurements)
        return entry


class PerfResultsFormatter:
    """
    Flat schema: one {name, durationMs, success} entry per record.

    ``name`` is the canonical record name (``s3.putobject.latency``), the
    same one the "results" schema emits, not the ``S3.PutObject`` form of
    older flat reports. ``durationMs`` is the first measurement.
    """

    schema_name = "perf-results"

    def __init__(self, provenance: Optional[ReportProvenance] = None) -> None:
        # Provenance is not part of this schema
        self.provenance = provenance

    def format(self, records: Sequence[MetricRecord]) -> Dict[str, Any]:
        return {
            "perf-results": [
                {
                    "name": r.name,
                    "durationMs": r.measurements[0],
                    "success": r.success,
                }
                for r in records
            ]
        }


_FORMATTERS: Dict[str, Callable[[Optional[ReportProvenance]], Any]] = {
    ResultsFormatter.schema_name: ResultsFormatter,
    PerfResultsFormatter.schema_name: PerfResultsFormatter,
}


def available_schemas() -> List[str]:
    """Names accepted by get_formatter."""
    return sorted(_FORMATTERS)


def get_formatter(
    schema_name: str,
    provenance: Optional[ReportProvenance] = None,
):
    """
    Create the formatter for a schema.

    Args:
        schema_name: "results" or "perf-results"
        provenance: Provenance fields for schemas that carry them

    Returns:
        ReportFormatter instance

    Raises:
        UnknownReportSchemaError: If no formatter handles the schema
    """
    try:
        factory = _FORMATTERS[schema_name]
    except KeyError:
        raise UnknownReportSchemaError(
            f"Unknown report schema '{schema_name}'. "
            f"Available: {', '.join(available_schemas())}"
        ) from None
    return factory(provenance)
