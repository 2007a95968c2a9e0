"""
Object Store Protocol.

The small slice of an object storage client that the benchmark
scenarios drive. Methods raise on failure.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ObjectStore(Protocol):
    """Minimal object storage client."""

    service_name: str

    def create_bucket(
        self,
        bucket: str,
        availability_zone_id: Optional[str] = None,
    ) -> None:
        """Create a bucket; directory buckets pass their zone id."""
        ...

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        """Upload an object."""
        ...

    def get_object(self, bucket: str, key: str) -> bytes:
        """Download an object."""
        ...

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object."""
        ...

    def delete_bucket(self, bucket: str) -> None:
        """Delete an empty bucket."""
        ...
