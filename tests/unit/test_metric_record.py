"""
Unit Tests for MetricRecord and TestContext.

Test Aspects Covered:
    ✅ Business Logic: Naming, description, unit, timestamp
    ✅ Edge Cases: Empty name, empty measurements, empty labels
"""

from __future__ import annotations

import time

import pytest
from pydantic import ValidationError

from perf_reporter.domain.entities import (
    UNIT_MILLISECONDS,
    Dimension,
    MetricRecord,
    metric_name,
)
from perf_reporter.domain.value_objects import TestContext


class TestMetricRecord:
    """Test cases for MetricRecord."""

    def test_latency_record_naming(self) -> None:
        """
        SCENARIO: Build a latency record for S3 PutObject
        EXPECTED: Lowercased dotted name, templated description, ms unit
        """
        # Act
        record = MetricRecord.latency("S3", "PutObject", 12.5)

        # Assert
        assert record.name == "s3.putobject.latency"
        assert record.description == "Time to complete PutObject operation"
        assert record.unit == UNIT_MILLISECONDS == "Milliseconds"
        assert record.measurements == (12.5,)
        assert record.success is True

    def test_timestamp_is_whole_epoch_seconds(self) -> None:
        """
        SCENARIO: Record created now
        EXPECTED: Integer timestamp within the current second range
        """
        # Arrange
        before = int(time.time())

        # Act
        record = MetricRecord.latency("S3", "GetObject", 1.0)

        # Assert
        assert isinstance(record.timestamp, int)
        assert before <= record.timestamp <= int(time.time())

    def test_record_is_immutable(self) -> None:
        """
        SCENARIO: Try to change a record after creation
        EXPECTED: ValidationError (frozen model)
        """
        record = MetricRecord.latency("S3", "GetObject", 1.0)

        with pytest.raises(ValidationError):
            record.name = "other"

    def test_empty_name_rejected(self) -> None:
        """
        SCENARIO: Record with empty name
        EXPECTED: ValidationError
        """
        with pytest.raises(ValidationError):
            MetricRecord(name="", measurements=(1.0,))

    def test_empty_measurements_rejected(self) -> None:
        """
        SCENARIO: Record without measurements
        EXPECTED: ValidationError
        """
        with pytest.raises(ValidationError):
            MetricRecord(name="s3.getobject.latency", measurements=())

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_measurement_rejected(self, value: float) -> None:
        """
        SCENARIO: Measurement that JSON cannot represent
        EXPECTED: ValidationError
        """
        with pytest.raises(ValidationError):
            MetricRecord(name="s3.getobject.latency", measurements=(value,))

    def test_multiple_measurements_allowed(self) -> None:
        record = MetricRecord(name="s3.getobject.latency", measurements=(1.0, 2.0, 3.0))

        assert len(record.measurements) == 3

    def test_dimension_map(self) -> None:
        record = MetricRecord.latency(
            "S3",
            "GetObject",
            1.0,
            dimensions=(
                Dimension(name="Size", value="8KB"),
                Dimension(name="BucketType", value="s3-express"),
            ),
        )

        assert record.dimension_map == {"Size": "8KB", "BucketType": "s3-express"}

    def test_metric_name_helper(self) -> None:
        assert metric_name("DataSync", "ListTasks") == "datasync.listtasks.latency"


class TestTestContext:
    """Test cases for TestContext dimensions."""

    def test_size_then_bucket_type_order(self) -> None:
        """
        SCENARIO: Both labels set
        EXPECTED: Size first, BucketType second
        """
        context = TestContext(size_label="64KB", bucket_type_label="s3-standard")

        dims = context.to_dimensions()

        assert [(d.name, d.value) for d in dims] == [
            ("Size", "64KB"),
            ("BucketType", "s3-standard"),
        ]

    def test_empty_labels_skipped(self) -> None:
        """
        SCENARIO: Only bucket type set, size empty string
        EXPECTED: Only BucketType dimension
        """
        context = TestContext(size_label="", bucket_type_label="s3-express")

        assert [d.name for d in context.to_dimensions()] == ["BucketType"]

    def test_extra_dimensions_appended(self) -> None:
        context = TestContext(size_label="1MB", extra={"Region": "us-east-1"})

        assert [d.name for d in context.to_dimensions()] == ["Size", "Region"]

    def test_default_is_empty(self) -> None:
        assert TestContext().is_empty
