"""
Test Suite for Perf Reporter.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Benchmark runner and CLI end-to-end
    - performance/: Concurrency stress tests for the collector

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest --cov=src/perf_reporter          # With coverage
"""
