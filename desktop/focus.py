"""Focus exclusivity rule shared by every stacking operation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from desktop.window_state import WindowRecord


def focus_exclusive(
    windows: Mapping[str, WindowRecord],
    target_id: str,
    update: Mapping[str, Any] | None = None,
) -> dict[str, WindowRecord]:
    """Focus ``target_id`` and unfocus every other record in one pass.

    ``update`` carries extra field changes for the target (new z-index,
    cleared minimize flag). Records that are already unfocused are reused.
    """
    target_update = {**(update or {}), "is_focused": True}
    result: dict[str, WindowRecord] = {}
    for window_id, record in windows.items():
        if window_id == target_id:
            result[window_id] = record.model_copy(update=target_update)
        elif record.is_focused:
            result[window_id] = record.model_copy(update={"is_focused": False})
        else:
            result[window_id] = record
    return result


def focused_ids(windows: Mapping[str, WindowRecord]) -> list[str]:
    return [window_id for window_id, record in windows.items() if record.is_focused]
