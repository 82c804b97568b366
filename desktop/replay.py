"""Apply scripted operation sequences to a registry."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from desktop.window_registry import WindowRegistry

ID_ONLY_OPERATIONS = ("close", "minimize", "maximize", "restore", "focus")


def load_script(path: Path) -> list[dict[str, Any]]:
    """Read a YAML list of operation mappings."""
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or []
    if not isinstance(data, list) or not all(isinstance(step, dict) for step in data):
        raise ValueError(f"Replay script must be a list of mappings: {path}")
    return data


def apply_operation(registry: WindowRegistry, step: Mapping[str, Any]) -> None:
    """Dispatch one ``{op: ..., id: ...}`` mapping to the registry."""
    params = dict(step)
    op = str(params.pop("op", "")).lower()
    if "id" not in params:
        raise ValueError(f"Operation {op or '?'} is missing an id")
    window_id = str(params["id"])
    params["id"] = window_id

    if op == "open":
        registry.open(params)
    elif op in ID_ONLY_OPERATIONS:
        getattr(registry, op)(window_id)
    elif op == "reposition":
        registry.reposition(window_id, params["x"], params["y"])
    elif op == "resize":
        registry.resize(window_id, params["width"], params["height"])
    else:
        raise ValueError(f"Unknown operation: {op!r}")


def apply_operations(registry: WindowRegistry, steps: Iterable[Mapping[str, Any]]) -> int:
    applied = 0
    for step in steps:
        apply_operation(registry, step)
        applied += 1
    return applied
