"""
Value Objects for Domain Layer.

Value objects describe the run a record belongs to or the toolchain that
produced a report. They have no identity of their own.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from perf_reporter.domain.entities import Dimension

SIZE_DIMENSION = "Size"
BUCKET_TYPE_DIMENSION = "BucketType"


class TestContext(BaseModel):
    """Run-level labels applied as dimensions to newly recorded metrics."""

    # Keep pytest from collecting this class
    __test__ = False

    size_label: Optional[str] = None
    bucket_type_label: Optional[str] = None
    extra: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_dimensions(self) -> Tuple[Dimension, ...]:
        """Convert to dimensions; empty labels are skipped."""
        dims = []
        if self.size_label:
            dims.append(Dimension(name=SIZE_DIMENSION, value=self.size_label))
        if self.bucket_type_label:
            dims.append(
                Dimension(name=BUCKET_TYPE_DIMENSION, value=self.bucket_type_label)
            )
        for name, value in self.extra.items():
            if value:
                dims.append(Dimension(name=name, value=value))
        return tuple(dims)

    @property
    def is_empty(self) -> bool:
        return not self.to_dimensions()


class ReportProvenance(BaseModel):
    """Static provenance fields carried at the top of a report."""

    product_id: str = "perf-reporter"
    sdk_version: str = "1.0.0"
    commit_id: str = "unknown"

    model_config = {"frozen": True}
