"""Configuration loading for a desktop session."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "desktop": {"baseline_z_index": 100},
    "telemetry": {
        "enabled": True,
        "sink": "log",
        "jsonl_path": "logs/telemetry.jsonl",
    },
    "logging": {"level": "INFO", "format": "text"},
}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def baseline_z_index(config: dict[str, Any]) -> int:
    """Read and validate ``desktop.baseline_z_index``."""
    value = config.get("desktop", {}).get("baseline_z_index", 100)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"desktop.baseline_z_index must be a non-negative integer, got {value!r}")
    return value


def load_effective_config(
    root: Path, overrides: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Merge built-in defaults, config/default.yaml, config/local.yaml and overrides."""
    config_dir = root / "config"
    merged = merge_dicts(DEFAULT_CONFIG, load_yaml(config_dir / "default.yaml"))
    merged = merge_dicts(merged, load_yaml(config_dir / "local.yaml"))
    if overrides:
        merged = merge_dicts(merged, overrides)
    baseline_z_index(merged)
    return merged
