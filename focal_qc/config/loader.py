from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AnalysisConfig
from ..models.validation_result import DEFAULT_THRESHOLDS, ValidationThresholds

"""Config loader for the focal-follow quality check tool.

Responsibilities:
- Load YAML config (default ``config/focal_qc.yml``)
- Validate against ``config_schema.json`` (unknown keys rejected)
- Apply defaults for thresholds, sheet, palette and report directory
- Resolve relative paths against the working directory
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/focal_qc.yml")
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing or not JSON, or the data violates it
            (missing ``merged_file``, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_thresholds(raw: dict[str, Any] | None) -> ValidationThresholds:
    if not raw:
        return DEFAULT_THRESHOLDS
    thresholds = ValidationThresholds(
        min_run_length=raw.get("min_run_length", DEFAULT_THRESHOLDS.min_run_length),
        min_interval_minutes=raw.get("min_interval_minutes", DEFAULT_THRESHOLDS.min_interval_minutes),
        max_interval_minutes=raw.get("max_interval_minutes", DEFAULT_THRESHOLDS.max_interval_minutes),
        expected_average_minutes=raw.get(
            "expected_average_minutes", DEFAULT_THRESHOLDS.expected_average_minutes
        ),
        average_tolerance_minutes=raw.get(
            "average_tolerance_minutes", DEFAULT_THRESHOLDS.average_tolerance_minutes
        ),
    )
    if thresholds.min_interval_minutes > thresholds.max_interval_minutes:
        raise ConfigError(
            "config validation failed: min_interval_minutes "
            f"({thresholds.min_interval_minutes}) exceeds max_interval_minutes "
            f"({thresholds.max_interval_minutes})"
        )
    return thresholds


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AnalysisConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    palette = data.get("palette")
    return AnalysisConfig(
        merged_file=Path(data["merged_file"]),
        source_files=[Path(p) for p in data.get("source_files", [])],
        sheet=data.get("sheet"),
        thresholds=_build_thresholds(data.get("validation")),
        palette=tuple(palette) if palette else None,
        report_directory=Path(data.get("report_directory", "./logs")),
    )
