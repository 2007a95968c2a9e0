"""
Core Domain Entities.

A MetricRecord is created once per observed call and never changes
afterwards. Collections of records are append-only.
"""

from __future__ import annotations

import time
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, Field, FiniteFloat

# Key under which the transport reports request latency (milliseconds)
LATENCY_METRIC_KEY = "RequestLatency"

UNIT_MILLISECONDS = "Milliseconds"

# Named numeric measurements captured by the transport for one call
CoreMetrics = Mapping[str, float]


def metric_name(service_name: str, operation_name: str) -> str:
    """Record name for a service operation: ``s3.putobject.latency``."""
    return f"{service_name.lower()}.{operation_name.lower()}.latency"


class Dimension(BaseModel):
    """Categorical tag attached to a metric record."""

    name: str = Field(..., min_length=1)
    value: str

    model_config = {"frozen": True}


class CallOutcome(BaseModel):
    """Terminal outcome of a remote call."""

    success: bool
    status_code: Optional[int] = None
    error_message: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def ok(cls, status_code: int = 200) -> "CallOutcome":
        return cls(success=True, status_code=status_code)

    @classmethod
    def error(cls, message: str, status_code: Optional[int] = None) -> "CallOutcome":
        return cls(success=False, status_code=status_code, error_message=message)


class MetricRecord(BaseModel):
    """One latency observation for one service call."""

    name: str = Field(..., min_length=1, description="service.operation.latency")
    description: str = Field(default="")
    unit: str = Field(default=UNIT_MILLISECONDS)
    timestamp: int = Field(
        default_factory=lambda: int(time.time()),
        description="Epoch seconds at creation",
    )
    measurements: Tuple[FiniteFloat, ...] = Field(..., min_length=1)
    dimensions: Tuple[Dimension, ...] = Field(default_factory=tuple)
    success: bool = True

    model_config = {"frozen": True}

    @classmethod
    def latency(
        cls,
        service_name: str,
        operation_name: str,
        latency_ms: float,
        dimensions: Tuple[Dimension, ...] = (),
        success: bool = True,
    ) -> "MetricRecord":
        """
        Build a latency record for a service operation.

        Args:
            service_name: Service that handled the call (e.g. "S3")
            operation_name: Operation invoked (e.g. "PutObject")
            latency_ms: Observed latency in milliseconds
            dimensions: Context tags, in output order
            success: Whether the call succeeded

        Returns:
            New MetricRecord named ``<service>.<operation>.latency``
        """
        return cls(
            name=metric_name(service_name, operation_name),
            description=f"Time to complete {operation_name} operation",
            unit=UNIT_MILLISECONDS,
            measurements=(float(latency_ms),),
            dimensions=tuple(dimensions),
            success=success,
        )

    @property
    def dimension_map(self) -> dict:
        """Dimensions as a name -> value dict (last one wins)."""
        return {d.name: d.value for d in self.dimensions}
