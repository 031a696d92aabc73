"""
Validation settings.

Settings are resolved from, in increasing precedence:
- built-in defaults
- the ``validation`` section of a YAML configuration file
- ``VALIDATION_*`` environment variables
- explicit overrides (typically CLI flags)

Example YAML:

    validation:
      compareTimestamps: true
      ttlToleranceMillis: 60000
      writetimeToleranceMillis: 1000
      floatingPointTolerance: 0.001
      writetimeCutoff: 0
      failuresToFetch: 100
      keyColumns: [id]
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .compare import ComparisonConfig

logger = logging.getLogger(__name__)

# YAML key -> settings attribute
YAML_KEYS = {
    "compareTimestamps": "compare_timestamps",
    "ttlToleranceMillis": "ttl_tolerance_millis",
    "writetimeToleranceMillis": "writetime_tolerance_millis",
    "floatingPointTolerance": "floating_point_tolerance",
    "writetimeCutoff": "writetime_cutoff",
    "failuresToFetch": "failures_to_fetch",
    "keyColumns": "key_columns",
    "maxWorkers": "max_workers",
    "batchSize": "batch_size",
}

ENV_PREFIX = "VALIDATION_"


@dataclass
class ValidationSettings:
    """Fully resolved settings for a validation run."""

    compare_timestamps: bool = False
    ttl_tolerance_millis: int = 0
    writetime_tolerance_millis: int = 0
    floating_point_tolerance: float = 0.001
    writetime_cutoff: int = 0
    failures_to_fetch: int = 100
    key_columns: list[str] = field(default_factory=lambda: ["id"])
    max_workers: int = 4
    batch_size: int = 1000

    def comparison_config(self) -> ComparisonConfig:
        """
        Build the per-comparison configuration.

        Raises:
            ValueError: If a tolerance is negative
        """
        return ComparisonConfig(
            writetime_cutoff=self.writetime_cutoff,
            floating_point_tolerance=self.floating_point_tolerance,
            ttl_tolerance_millis=self.ttl_tolerance_millis,
            writetime_tolerance_millis=self.writetime_tolerance_millis,
            compare_timestamps=self.compare_timestamps,
        )


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "on"):
        return True
    if text in ("false", "0", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def _parse_key_columns(value: Any) -> list[str]:
    if isinstance(value, str):
        columns = [col.strip() for col in value.split(",")]
    else:
        columns = [str(col).strip() for col in value]
    columns = [col for col in columns if col]
    if not columns:
        raise ValueError("key_columns cannot be empty")
    return columns


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw setting value to the attribute's type."""
    try:
        match name:
            case "compare_timestamps":
                return _parse_bool(value)
            case "floating_point_tolerance":
                return float(value)
            case "key_columns":
                return _parse_key_columns(value)
            case _:
                return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid value for {name}: {value!r} ({e})") from e


def load_yaml_section(path: str | Path) -> dict[str, Any]:
    """
    Read the ``validation`` section of a YAML configuration file

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the section is malformed or holds unknown keys
    """
    with open(path, encoding="utf-8") as f:
        document = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    section = document.get("validation") or {}
    if not isinstance(section, dict):
        raise ValueError(f"{path}: 'validation' must be a mapping")

    unknown = sorted(set(section) - set(YAML_KEYS))
    if unknown:
        raise ValueError(f"{path}: unknown validation setting(s): {', '.join(unknown)}")

    return {YAML_KEYS[key]: value for key, value in section.items()}


def read_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``VALIDATION_<SETTING>`` variables, e.g. VALIDATION_TTL_TOLERANCE_MILLIS."""
    values = {}
    for attribute in YAML_KEYS.values():
        env_name = ENV_PREFIX + attribute.upper()
        if env_name in env:
            values[attribute] = env[env_name]
    return values


def load_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ValidationSettings:
    """
    Resolve validation settings

    Args:
        path: Optional YAML configuration file
        env: Environment mapping (default: os.environ)
        **overrides: Explicit values; None values are ignored

    Returns:
        ValidationSettings

    Raises:
        ValueError: On unknown settings, unparsable values or negative tolerances
    """
    known = {f.name for f in fields(ValidationSettings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")

    raw: dict[str, Any] = {}
    if path is not None:
        raw.update(load_yaml_section(path))
        logger.debug(f"Loaded validation settings from {path}")
    raw.update(read_env(os.environ if env is None else env))
    raw.update({name: value for name, value in overrides.items() if value is not None})

    settings = ValidationSettings(**{name: _coerce(name, value) for name, value in raw.items()})

    # Fails fast on negative tolerances
    settings.comparison_config()
    if settings.failures_to_fetch < 0:
        raise ValueError(f"failures_to_fetch cannot be negative: {settings.failures_to_fetch}")

    return settings
