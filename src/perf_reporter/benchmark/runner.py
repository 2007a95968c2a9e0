"""
Benchmark Runner - End-to-End Object Store Scenarios.

Each scenario labels the shared ScenarioContext with its size and bucket
type, then drives one bucket through its lifecycle:

    CreateBucket -> PutObject -> GetObject -> DeleteObject -> DeleteBucket

Design Notes:
    - A failed CreateBucket ends the scenario (nothing to clean up)
    - Put/Get failures are logged; cleanup still runs
    - Every call goes through the InstrumentedDispatcher, so attached
      collectors see the full call lifecycle
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import structlog

from perf_reporter.collector.scenario_context import ScenarioContext
from perf_reporter.config.models import ScenarioConfig
from perf_reporter.dispatch.call_dispatcher import InstrumentedDispatcher
from perf_reporter.domain.exceptions import ScenarioFailed
from perf_reporter.interfaces.object_store import ObjectStore

logger = structlog.get_logger(__name__)

EXPRESS_BUCKET_TYPE = "s3-express"


def short_id() -> str:
    """First 8 characters of a lowercased random UUID."""
    return str(uuid.uuid4()).lower()[:8]


@dataclass
class ScenarioResult:
    """Outcome of one benchmark scenario."""
    scenario: ScenarioConfig
    bucket: str
    passed: bool
    uploaded: bool = False
    downloaded: bool = False


class BenchmarkRunner:
    """Runs the object store scenario matrix."""

    def __init__(
        self,
        store: ObjectStore,
        dispatcher: InstrumentedDispatcher,
        context: ScenarioContext,
        availability_zone_id: str = "use1-az4",
        object_key: str = "test-object",
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """
        Initialize runner.

        Args:
            store: Object store client
            dispatcher: Dispatcher wired to the collectors
            context: Scenario labels shared with the collectors
            availability_zone_id: Zone for directory (express) buckets
            object_key: Key of the test object
            id_factory: Produces the unique part of bucket names
        """
        self.store = store
        self.dispatcher = dispatcher
        self.context = context
        self.availability_zone_id = availability_zone_id
        self.object_key = object_key
        self._id_factory = id_factory or short_id

    def bucket_name(self, scenario: ScenarioConfig) -> str:
        """Unique bucket name for a scenario."""
        bucket_id = self._id_factory()
        if scenario.bucket_type == EXPRESS_BUCKET_TYPE:
            return f"perf-express-{bucket_id}--{self.availability_zone_id}--x-s3"
        return f"perf-standard-{bucket_id}"

    def run_single(
        self,
        scenario: ScenarioConfig,
        raise_on_failure: bool = False,
    ) -> ScenarioResult:
        """
        Run one scenario.

        Args:
            scenario: Size and bucket type to test
            raise_on_failure: Raise instead of returning a failed result

        Returns:
            ScenarioResult (passed is False if the bucket could not be created)

        Raises:
            ScenarioFailed: If raise_on_failure and CreateBucket failed
        """
        log = logger.bind(size=scenario.size_label, bucket_type=scenario.bucket_type)
        log.info("scenario_started")
        self.context.set(scenario.size_label, scenario.bucket_type)

        bucket = self.bucket_name(scenario)
        zone = (
            self.availability_zone_id
            if scenario.bucket_type == EXPRESS_BUCKET_TYPE
            else None
        )
        result = ScenarioResult(scenario=scenario, bucket=bucket, passed=False)

        try:
            self._call("CreateBucket", lambda: self.store.create_bucket(bucket, zone))
        except Exception as e:
            log.error("create_bucket_failed", bucket=bucket, error=str(e))
            if raise_on_failure:
                raise ScenarioFailed(f"CreateBucket failed for {bucket}") from e
            return result
        log.info("bucket_created", bucket=bucket)

        payload = b"x" * scenario.size_bytes
        key = self.object_key

        try:
            self._call("PutObject", lambda: self.store.put_object(bucket, key, payload))
            result.uploaded = True
            log.info("object_uploaded", bytes=scenario.size_bytes)
        except Exception as e:
            log.error("put_object_failed", error=str(e))

        try:
            self._call("GetObject", lambda: self.store.get_object(bucket, key))
            result.downloaded = True
            log.info("object_downloaded")
        except Exception as e:
            log.error("get_object_failed", error=str(e))

        self._cleanup(bucket, log)
        result.passed = True
        return result

    def run_matrix(
        self,
        matrix: Iterable[ScenarioConfig],
    ) -> List[ScenarioResult]:
        """Run every scenario in order."""
        results = [self.run_single(scenario) for scenario in matrix]
        logger.info(
            "matrix_completed",
            scenarios=len(results),
            passed=sum(1 for r in results if r.passed),
        )
        return results

    def _cleanup(self, bucket: str, log) -> None:
        try:
            self._call(
                "DeleteObject",
                lambda: self.store.delete_object(bucket, self.object_key),
            )
            self._call("DeleteBucket", lambda: self.store.delete_bucket(bucket))
            log.info("cleaned_up", bucket=bucket)
        except Exception as e:
            log.warning("cleanup_failed", bucket=bucket, error=str(e))

    def _call(self, operation_name: str, func: Callable[[], object]) -> object:
        return self.dispatcher.invoke(self.store.service_name, operation_name, func)
