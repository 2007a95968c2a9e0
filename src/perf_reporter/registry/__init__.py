"""
Registry Package - Monitoring Factory Registration.

    - MonitoringRegistry: Holds constructor functions, creates monitors
      and shuts them all down (flushing each) at the end of a run
"""

from perf_reporter.registry.monitoring_registry import MonitoringRegistry

__all__ = ["MonitoringRegistry"]
