"""
In-Memory Object Store.

A fake object storage client for dry runs and testing. Buckets and
objects live in a dict; latency and failures can be simulated.
"""

from __future__ import annotations

import random
import threading
import time
from typing import Dict, Iterable, Optional

EXPRESS_BUCKET_SUFFIX = "--x-s3"


class ObjectStoreError(Exception):
    """Raised by the in-memory store for invalid requests."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code


class InMemoryObjectStore:
    """Fake object store with optional simulated latency."""

    service_name = "S3"

    def __init__(
        self,
        latency_seconds: float = 0.0,
        jitter_seconds: float = 0.0,
        failing_operations: Optional[Iterable[str]] = None,
        seed: int = 42,
    ) -> None:
        """
        Initialize the store.

        Args:
            latency_seconds: Base delay added to every call
            jitter_seconds: Upper bound of random extra delay
            failing_operations: Operation names that always raise
            seed: Random seed for jitter
        """
        self.latency_seconds = latency_seconds
        self.jitter_seconds = jitter_seconds
        self.failing_operations = set(failing_operations or [])
        self._rng = random.Random(seed)
        self._buckets: Dict[str, Dict[str, bytes]] = {}
        self._lock = threading.Lock()

    def create_bucket(
        self,
        bucket: str,
        availability_zone_id: Optional[str] = None,
    ) -> None:
        self._simulate("CreateBucket")
        if bucket.endswith(EXPRESS_BUCKET_SUFFIX) and not availability_zone_id:
            raise ObjectStoreError(
                "InvalidBucketName",
                "directory buckets require an availability zone",
            )
        with self._lock:
            if bucket in self._buckets:
                raise ObjectStoreError("BucketAlreadyExists", bucket)
            self._buckets[bucket] = {}

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        self._simulate("PutObject")
        with self._lock:
            self._bucket(bucket)[key] = bytes(body)

    def get_object(self, bucket: str, key: str) -> bytes:
        self._simulate("GetObject")
        with self._lock:
            objects = self._bucket(bucket)
            if key not in objects:
                raise ObjectStoreError("NoSuchKey", f"{bucket}/{key}")
            return objects[key]

    def delete_object(self, bucket: str, key: str) -> None:
        self._simulate("DeleteObject")
        with self._lock:
            self._bucket(bucket).pop(key, None)

    def delete_bucket(self, bucket: str) -> None:
        self._simulate("DeleteBucket")
        with self._lock:
            if self._bucket(bucket):
                raise ObjectStoreError("BucketNotEmpty", bucket)
            del self._buckets[bucket]

    def list_buckets(self) -> list:
        with self._lock:
            return sorted(self._buckets)

    def _bucket(self, bucket: str) -> Dict[str, bytes]:
        try:
            return self._buckets[bucket]
        except KeyError:
            raise ObjectStoreError("NoSuchBucket", bucket) from None

    def _simulate(self, operation_name: str) -> None:
        """Apply simulated latency and injected failures."""
        delay = self.latency_seconds
        if self.jitter_seconds:
            with self._lock:
                delay += self._rng.uniform(0, self.jitter_seconds)
        if delay:
            time.sleep(delay)
        if operation_name in self.failing_operations:
            raise ObjectStoreError("InternalError", f"{operation_name} failed")
