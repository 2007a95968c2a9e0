"""
Adapters Package - Infrastructure Implementations.

Stores:
    - InMemoryObjectStore: Fake object store for dry runs and tests

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
"""

from perf_reporter.adapters.in_memory_store import InMemoryObjectStore, ObjectStoreError

__all__ = ["InMemoryObjectStore", "ObjectStoreError"]
