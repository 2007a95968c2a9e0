"""
Benchmark Package - Object Store Scenario Matrix.

    - BenchmarkRunner: create bucket -> upload -> download -> cleanup,
      once per scenario, with calls routed through the dispatcher
    - ScenarioResult: Outcome of one scenario
"""

from perf_reporter.benchmark.runner import BenchmarkRunner, ScenarioResult

__all__ = ["BenchmarkRunner", "ScenarioResult"]
