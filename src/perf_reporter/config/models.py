"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from perf_reporter.domain.entities import LATENCY_METRIC_KEY

DEFAULT_REPORT_PATH = "perf-results.json"

# Operations sampled by the object storage benchmark
BENCHMARK_OPERATIONS = ["PutObject", "GetObject"]


class ReportConfig(BaseModel):
    """Where and how the report is written."""

    output_path: str = Field(default=DEFAULT_REPORT_PATH, min_length=1)
    schema_name: Literal["results", "perf-results"] = Field(
        default="results",
        alias="schema",
    )
    echo_stdout: bool = True
    indent: int = Field(default=2, ge=0)

    model_config = {"populate_by_name": True}


class ProvenanceConfig(BaseModel):
    """Static provenance fields. commit_id "auto" resolves the Git SHA."""

    product_id: str = "perf-reporter"
    sdk_version: str = "1.0.0"
    commit_id: str = "unknown"


class CollectionConfig(BaseModel):
    """What the collector records."""

    latency_metric_key: str = Field(default=LATENCY_METRIC_KEY, min_length=1)
    # None records every operation
    operations: Optional[List[str]] = None


class ScenarioConfig(BaseModel):
    """One cell of the benchmark matrix."""

    size_label: str = Field(..., min_length=1)
    size_bytes: int = Field(..., ge=0)
    bucket_type: Literal["s3-standard", "s3-express"] = "s3-standard"

    model_config = {"frozen": True}


def default_matrix() -> List[ScenarioConfig]:
    """8KB / 64KB / 1MB against standard and express buckets."""
    sizes = [("8KB", 8 * 1024), ("64KB", 64 * 1024), ("1MB", 1024 * 1024)]
    return [
        ScenarioConfig(size_label=label, size_bytes=size, bucket_type=bucket_type)
        for bucket_type in ("s3-standard", "s3-express")
        for label, size in sizes
    ]


class BenchmarkConfig(BaseModel):
    """Benchmark scenario settings."""

    region: str = "us-east-1"
    availability_zone_id: str = "use1-az4"
    object_key: str = Field(default="test-object", min_length=1)
    matrix: List[ScenarioConfig] = Field(default_factory=default_matrix)

    @field_validator("matrix")
    @classmethod
    def _matrix_not_empty(cls, value: List[ScenarioConfig]) -> List[ScenarioConfig]:
        if not value:
            raise ValueError("benchmark matrix must contain at least one scenario")
        return value


class ReporterConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    report: ReportConfig = Field(default_factory=ReportConfig)
    provenance: ProvenanceConfig = Field(default_factory=ProvenanceConfig)
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    benchmark: BenchmarkConfig = Field(default_factory=BenchmarkConfig)
