"""
Observability Package - Provenance for Reports.

    - resolve_provenance: Build ReportProvenance from config, resolving
      the Git commit when asked to

Logging is configured via perf_reporter.configure_logging (structlog).
"""

from perf_reporter.observability.provenance import get_git_sha, resolve_provenance

__all__ = ["get_git_sha", "resolve_provenance"]
