"""
Scenario Context - Run-Level Labels for New Records.

A test driver sets the current scenario labels; the collector reads them
when it builds each record. One instance is shared between a driver and
the collectors it feeds, instead of process-wide statics.

Design Notes:
    - Last write wins; changes are never applied to existing records
    - scenario() restores the previous labels on exit
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from perf_reporter.domain.value_objects import TestContext


class ScenarioContext:
    """Thread-safe holder of the current TestContext."""

    def __init__(self, initial: Optional[TestContext] = None) -> None:
        self._current = initial or TestContext()
        self._lock = threading.Lock()

    def set(
        self,
        size_label: Optional[str] = None,
        bucket_type_label: Optional[str] = None,
        **extra: str,
    ) -> TestContext:
        """
        Replace the current labels.

        Args:
            size_label: Object size label (e.g. "64KB")
            bucket_type_label: Bucket type label (e.g. "s3-standard")
            **extra: Additional dimension name -> value pairs

        Returns:
            The previous TestContext
        """
        new_context = TestContext(
            size_label=size_label,
            bucket_type_label=bucket_type_label,
            extra=extra,
        )
        with self._lock:
            previous = self._current
            self._current = new_context
        return previous

    def current(self) -> TestContext:
        with self._lock:
            return self._current

    def clear(self) -> None:
        with self._lock:
            self._current = TestContext()

    @contextmanager
    def scenario(
        self,
        size_label: Optional[str] = None,
        bucket_type_label: Optional[str] = None,
        **extra: str,
    ) -> Iterator[TestContext]:
        """Apply labels for the duration of a with-block."""
        previous = self.set(size_label, bucket_type_label, **extra)
        try:
            yield self.current()
        finally:
            with self._lock:
                self._current = previous

    def as_dict(self) -> Dict[str, str]:
        return {d.name: d.value for d in self.current().to_dimensions()}
