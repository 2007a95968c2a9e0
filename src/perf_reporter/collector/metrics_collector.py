"""
Request Metrics Collector.

Observes outbound service calls through the five lifecycle hooks and keeps
one latency record per completed call. The collected records are published
once, when the collector is closed.

Design Notes:
    - One lock guards the record list, the retry counts and the flush state
    - Hooks never raise; unexpected errors are logged and dropped
    - A missing, non-numeric or non-finite latency is recorded as 0.0
    - After close() the collector is flushed and ignores further calls
    - A collector dropped without close() is flushed when garbage collected
      or at interpreter exit
"""

from __future__ import annotations

import math
import threading
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import structlog

from perf_reporter.collector.operation_filter import OperationFilter
from perf_reporter.collector.scenario_context import ScenarioContext
from perf_reporter.domain.entities import (
    LATENCY_METRIC_KEY,
    CallOutcome,
    CoreMetrics,
    MetricRecord,
    metric_name,
)
from perf_reporter.observability.provenance import resolve_provenance
from perf_reporter.reporting.formatters import get_formatter
from perf_reporter.reporting.json_reporter import JsonReporter

if TYPE_CHECKING:
    from perf_reporter.config.models import ReporterConfig

logger = structlog.get_logger(__name__)


class _CollectorState:
    """Records, retry counts and flush flag guarded by one lock."""

    def __init__(self) -> None:
        self.records: List[MetricRecord] = []
        self.retries: Dict[str, int] = {}
        self.flushed = False
        self.lock = threading.Lock()


def _publish_once(state: _CollectorState, reporter: JsonReporter) -> Optional[str]:
    """Publish the recorded state unless it was already published."""
    with state.lock:
        if state.flushed:
            return None
        state.flushed = True
        return reporter.publish(list(state.records))


class RequestMetricsCollector:
    """
    Thread-safe collector of per-call latency records.

    Implements the MonitoringInterface protocol.
    """

    def __init__(
        self,
        reporter: Optional[JsonReporter] = None,
        context: Optional[ScenarioContext] = None,
        operation_filter: Optional[OperationFilter] = None,
        latency_metric_key: str = LATENCY_METRIC_KEY,
    ) -> None:
        """
        Initialize the collector.

        Args:
            reporter: Publishes records on close (default: canonical schema
                to stdout and perf-results.json)
            context: Shared scenario labels (a private one if omitted)
            operation_filter: Operations to record (all if omitted)
            latency_metric_key: Key of the latency value in core metrics
        """
        self.reporter = reporter or JsonReporter()
        self.context = context or ScenarioContext()
        self.operation_filter = operation_filter or OperationFilter.allow_all()
        self.latency_metric_key = latency_metric_key

        self._state = _CollectorState()
        # Holds no reference to self; runs at most once
        self._finalizer = weakref.finalize(
            self, _publish_once, self._state, self.reporter
        )

    @classmethod
    def from_config(
        cls,
        config: ReporterConfig,
        context: Optional[ScenarioContext] = None,
    ) -> "RequestMetricsCollector":
        """
        Build a collector and its reporter from configuration.

        Raises:
            UnknownReportSchemaError: If the configured schema is unknown
        """
        formatter = get_formatter(
            config.report.schema_name,
            resolve_provenance(config.provenance),
        )
        reporter = JsonReporter(
            output_path=config.report.output_path,
            formatter=formatter,
            echo_stdout=config.report.echo_stdout,
            indent=config.report.indent,
        )
        return cls(
            reporter=reporter,
            context=context,
            operation_filter=OperationFilter(config.collection.operations),
            latency_metric_key=config.collection.latency_metric_key,
        )

    # =========================================================================
    # MonitoringInterface
    # =========================================================================

    def on_call_started(
        self,
        service_name: str,
        operation_name: str,
        request: Any = None,
    ) -> Optional[Any]:
        return None

    def on_call_succeeded(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        outcome: Optional[CallOutcome],
        core_metrics: CoreMetrics,
        token: Any = None,
    ) -> None:
        self._record_metric(service_name, operation_name, core_metrics, success=True)

    def on_call_failed(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        outcome: Optional[CallOutcome],
        core_metrics: CoreMetrics,
        token: Any = None,
    ) -> None:
        self._record_metric(service_name, operation_name, core_metrics, success=False)

    def on_call_retried(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        token: Any = None,
    ) -> None:
        if not self.operation_filter.allows(operation_name):
            return
        try:
            name = metric_name(service_name, operation_name)
            with self._state.lock:
                self._state.retries[name] = self._state.retries.get(name, 0) + 1
        except Exception:
            logger.exception(
                "retry_count_failed",
                service=service_name,
                operation=operation_name,
            )

    def on_call_finished(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        token: Any = None,
    ) -> None:
        pass

    # =========================================================================
    # Test context
    # =========================================================================

    def set_test_context(
        self,
        size_label: Optional[str] = None,
        bucket_type_label: Optional[str] = None,
    ) -> None:
        """
        Set labels applied to records created from now on.

        Args:
            size_label: Object size label (e.g. "64KB")
            bucket_type_label: Bucket type label (e.g. "s3-standard")
        """
        self.context.set(size_label, bucket_type_label)

    # =========================================================================
    # Recording
    # =========================================================================

    def _record_metric(
        self,
        service_name: str,
        operation_name: str,
        core_metrics: Optional[CoreMetrics],
        success: bool,
    ) -> None:
        """Build a record for one call and append it."""
        if not self.operation_filter.allows(operation_name):
            logger.debug(
                "call_not_recorded",
                service=service_name,
                operation=operation_name,
            )
            return

        try:
            record = MetricRecord.latency(
                service_name,
                operation_name,
                self._extract_latency(core_metrics),
                dimensions=self.context.current().to_dimensions(),
                success=success,
            )
            with self._state.lock:
                if self._state.flushed:
                    logger.debug("call_after_flush_ignored", name=record.name)
                    return
                self._state.records.append(record)
        except Exception:
            logger.exception(
                "record_metric_failed",
                service=service_name,
                operation=operation_name,
            )

    def _extract_latency(self, core_metrics: Optional[CoreMetrics]) -> float:
        """Latency in ms from the metrics bag, 0.0 if not reported."""
        if not core_metrics:
            return 0.0
        value = core_metrics.get(self.latency_metric_key)
        if value is None:
            return 0.0
        try:
            latency = float(value)
        except (TypeError, ValueError):
            latency = math.nan
        if not math.isfinite(latency):
            logger.warning(
                "latency_not_numeric",
                key=self.latency_metric_key,
                value=repr(value),
            )
            return 0.0
        return latency

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def records(self) -> Tuple[MetricRecord, ...]:
        """Snapshot of the records collected so far."""
        with self._state.lock:
            return tuple(self._state.records)

    @property
    def is_flushed(self) -> bool:
        with self._state.lock:
            return self._state.flushed

    def retry_counts(self) -> Dict[str, int]:
        with self._state.lock:
            return dict(self._state.retries)

    def aggregate(self) -> Dict[str, Dict[str, Any]]:
        """
        Summarize records per metric name.

        Returns:
            Dict of name -> count, total, min, max, mean, successes,
            failures and retries
        """
        with self._state.lock:
            records = list(self._state.records)
            retries = dict(self._state.retries)

        summary: Dict[str, Dict[str, Any]] = {}
        for record in records:
            entry = summary.setdefault(
                record.name,
                {"values": [], "successes": 0, "failures": 0},
            )
            entry["values"].extend(record.measurements)
            if record.success:
                entry["successes"] += 1
            else:
                entry["failures"] += 1

        for name, entry in summary.items():
            values = entry.pop("values")
            total = sum(values)
            entry.update(
                count=len(values),
                total=total,
                min=min(values),
                max=max(values),
                mean=total / len(values),
                retries=retries.get(name, 0),
            )
        return summary

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def flush(self) -> Optional[str]:
        """
        Publish the collected records once.

        Returns:
            The report text, or None if empty or already flushed
        """
        return self._finalizer()

    def close(self) -> None:
        self.flush()

    def __enter__(self) -> "RequestMetricsCollector":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
