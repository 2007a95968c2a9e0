"""
Configuration Loader.

Reads a YAML config file, overlays an optional profile and validates the
result as a ReporterConfig. Profiles are looked up in a ``profiles``
directory beside the config file:

    config/default.yaml
    config/profiles/put_get_only.yaml
    config/profiles/legacy_schema.yaml

Design Notes:
    - Profile lookup depends only on the config file location, not the cwd
    - A profile may also be given directly as a path to a YAML file
    - YAML documents must hold a mapping at the top level
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from perf_reporter.config.models import ReporterConfig

PROFILES_DIRNAME = "profiles"
_YAML_SUFFIXES = (".yaml", ".yml")


def deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge overlay into a copy of base.

    Nested mappings are merged key by key; any other overlay value
    (lists included) replaces the base value.
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_yaml(path: Path) -> Dict[str, Any]:
    """
    Read a YAML mapping.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is not a mapping
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{path}: expected a mapping at top level, got {type(data).__name__}"
        )
    return data


class ConfigLoader:
    """Loads one config file and the profiles stored beside it."""

    def __init__(self, config_path: Union[str, Path]) -> None:
        self.config_path = Path(config_path)

    @property
    def profiles_dir(self) -> Path:
        return self.config_path.parent / PROFILES_DIRNAME

    def available_profiles(self) -> List[str]:
        """Profile names found in the profiles directory."""
        if not self.profiles_dir.is_dir():
            return []
        return sorted(
            p.stem for p in self.profiles_dir.iterdir() if p.suffix in _YAML_SUFFIXES
        )

    def profile_path(self, profile: str) -> Path:
        """Path of a named profile, or the profile itself if it is a YAML path."""
        if Path(profile).suffix in _YAML_SUFFIXES:
            return Path(profile)
        for suffix in _YAML_SUFFIXES:
            candidate = self.profiles_dir / f"{profile}{suffix}"
            if candidate.exists():
                return candidate
        return self.profiles_dir / f"{profile}.yaml"

    def load(self, profile: Optional[str] = None) -> ReporterConfig:
        """
        Load, overlay and validate.

        Args:
            profile: Profile name or YAML path to merge over the base file

        Returns:
            Validated ReporterConfig

        Raises:
            FileNotFoundError: If the config file or the profile is missing
            ValueError: If a document is not a mapping
            ValidationError: If the merged config is invalid
        """
        data = read_yaml(self.config_path)

        if profile:
            path = self.profile_path(profile)
            if not path.exists():
                available = ", ".join(self.available_profiles()) or "none"
                raise FileNotFoundError(
                    f"Profile not found: {profile} "
                    f"(looked for {path}; available: {available})"
                )
            data = deep_merge(data, read_yaml(path))

        return ReporterConfig.model_validate(data)


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
) -> ReporterConfig:
    """Load a config file with an optional profile overlay."""
    return ConfigLoader(config_path).load(profile)


def apply_overrides(
    config: ReporterConfig,
    overrides: Dict[str, Any],
) -> ReporterConfig:
    """
    Deep merge overrides into an existing configuration.

    Args:
        config: Base configuration
        overrides: Nested dict using the YAML field names

    Returns:
        New validated ReporterConfig
    """
    merged = deep_merge(config.model_dump(by_alias=True), overrides)
    return ReporterConfig.model_validate(merged)
