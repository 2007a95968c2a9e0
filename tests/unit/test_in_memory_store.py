"""
Unit Tests for InMemoryObjectStore.

Test Aspects Covered:
    ✅ Business Logic: Bucket and object lifecycle
    ✅ Error Handling: Missing buckets/keys, injected failures
"""

from __future__ import annotations

import pytest

from perf_reporter.adapters.in_memory_store import InMemoryObjectStore, ObjectStoreError
from perf_reporter.interfaces.object_store import ObjectStore


class TestInMemoryObjectStore:
    """Test cases for InMemoryObjectStore."""

    def test_implements_protocol(self) -> None:
        assert isinstance(InMemoryObjectStore(), ObjectStore)

    def test_full_lifecycle(self) -> None:
        """
        SCENARIO: Create, put, get, delete object, delete bucket
        EXPECTED: Data round-trips; store empty at the end
        """
        store = InMemoryObjectStore()

        store.create_bucket("perf-standard-1")
        store.put_object("perf-standard-1", "test-object", b"x" * 10)
        body = store.get_object("perf-standard-1", "test-object")
        store.delete_object("perf-standard-1", "test-object")
        store.delete_bucket("perf-standard-1")

        assert body == b"x" * 10
        assert store.list_buckets() == []

    def test_express_bucket_requires_zone(self) -> None:
        store = InMemoryObjectStore()

        with pytest.raises(ObjectStoreError) as exc_info:
            store.create_bucket("perf-express-1--use1-az4--x-s3")

        assert exc_info.value.code == "InvalidBucketName"
        store.create_bucket("perf-express-1--use1-az4--x-s3", "use1-az4")

    def test_duplicate_bucket(self) -> None:
        store = InMemoryObjectStore()
        store.create_bucket("b")

        with pytest.raises(ObjectStoreError, match="BucketAlreadyExists"):
            store.create_bucket("b")

    def test_missing_key(self) -> None:
        store = InMemoryObjectStore()
        store.create_bucket("b")

        with pytest.raises(ObjectStoreError, match="NoSuchKey"):
            store.get_object("b", "k")

    def test_missing_bucket(self) -> None:
        with pytest.raises(ObjectStoreError, match="NoSuchBucket"):
            InMemoryObjectStore().put_object("nope", "k", b"")

    def test_non_empty_bucket_not_deleted(self) -> None:
        store = InMemoryObjectStore()
        store.create_bucket("b")
        store.put_object("b", "k", b"1")

        with pytest.raises(ObjectStoreError, match="BucketNotEmpty"):
            store.delete_bucket("b")

    def test_injected_failure(self) -> None:
        store = InMemoryObjectStore(failing_operations=["PutObject"])
        store.create_bucket("b")

        with pytest.raises(ObjectStoreError, match="InternalError"):
            store.put_object("b", "k", b"1")
