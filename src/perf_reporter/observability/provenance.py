"""
Provenance - Toolchain Metadata for Reports.

Fills the productId / sdkVersion / commitId fields of a report.

Design Notes:
    - commit_id "auto" is resolved from Git once per process
    - Git not being available is not an error; "unknown" is used
"""

from __future__ import annotations

import subprocess
from functools import lru_cache
from typing import Optional

import structlog

from perf_reporter.config.models import ProvenanceConfig
from perf_reporter.domain.value_objects import ReportProvenance

logger = structlog.get_logger(__name__)

AUTO_COMMIT = "auto"
UNKNOWN_COMMIT = "unknown"


@lru_cache(maxsize=1)
def get_git_sha() -> Optional[str]:
    """Short SHA of HEAD, or None outside a Git checkout."""
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
        ).strip()
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return sha[:8] or None


def resolve_provenance(config: Optional[ProvenanceConfig] = None) -> ReportProvenance:
    """
    Build report provenance from configuration.

    Args:
        config: Provenance settings (defaults if omitted)

    Returns:
        ReportProvenance with commit_id resolved
    """
    config = config or ProvenanceConfig()
    commit_id = config.commit_id

    if commit_id == AUTO_COMMIT:
        commit_id = get_git_sha() or UNKNOWN_COMMIT
        logger.debug("commit_id_resolved", commit_id=commit_id)

    return ReportProvenance(
        product_id=config.product_id,
        sdk_version=config.sdk_version,
        commit_id=commit_id,
    )
