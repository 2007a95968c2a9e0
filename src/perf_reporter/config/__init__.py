"""
Configuration Package - Models and Loaders.

Configuration Structure:
    - ReporterConfig: Root configuration object
    - ReportConfig: Output path, schema, stdout echo
    - ProvenanceConfig: productId / sdkVersion / commitId
    - CollectionConfig: Latency key and operation filter
    - BenchmarkConfig: Region, zone and scenario matrix

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Support for profiles (overlay YAML files)
"""

from perf_reporter.config.loader import (
    ConfigLoader,
    apply_overrides,
    deep_merge,
    load_config,
)
from perf_reporter.config.models import (
    BenchmarkConfig,
    CollectionConfig,
    ProvenanceConfig,
    ReportConfig,
    ReporterConfig,
    ScenarioConfig,
)

__all__ = [
    "BenchmarkConfig",
    "CollectionConfig",
    "ConfigLoader",
    "ProvenanceConfig",
    "ReportConfig",
    "ReporterConfig",
    "ScenarioConfig",
    "apply_overrides",
    "deep_merge",
    "load_config",
]
