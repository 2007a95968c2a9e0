"""
Operation Filter - Sampling Policy for Recorded Calls.

Calls for operations outside the allowed set are dropped before the
collector takes its lock.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from perf_reporter.config.models import BENCHMARK_OPERATIONS


class OperationFilter:
    """Allow-list of operation names; None allows everything."""

    def __init__(self, operations: Optional[Iterable[str]] = None) -> None:
        self._operations: Optional[FrozenSet[str]] = (
            frozenset(operations) if operations is not None else None
        )

    @classmethod
    def allow_all(cls) -> "OperationFilter":
        return cls(None)

    @classmethod
    def benchmark(cls) -> "OperationFilter":
        """Only the put/get operations timed by the storage benchmark."""
        return cls(BENCHMARK_OPERATIONS)

    @property
    def operations(self) -> Optional[FrozenSet[str]]:
        return self._operations

    @property
    def allows_all(self) -> bool:
        return self._operations is None

    def allows(self, operation_name: str) -> bool:
        if self._operations is None:
            return True
        return operation_name in self._operations

    def __repr__(self) -> str:
        if self._operations is None:
            return "OperationFilter(all)"
        return f"OperationFilter({sorted(self._operations)})"
