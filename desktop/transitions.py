"""Pure transaction functions over ``DesktopState``.

Each function reads a state, never mutates it, and returns a ``Transition``
holding the next state. The registry commits ``transition.state`` as a whole,
so the record collection and the ordering key always move together.
"""

from __future__ import annotations

from dataclasses import dataclass

from desktop.focus import focus_exclusive
from desktop.window_state import DesktopState, WindowRecord, WindowSpec


@dataclass(frozen=True)
class Transition:
    """Outcome of one operation on a desktop state."""

    state: DesktopState
    applied: bool
    before: WindowRecord | None = None
    after: WindowRecord | None = None

    @property
    def created(self) -> bool:
        return self.applied and self.before is None and self.after is not None


def _unchanged(state: DesktopState) -> Transition:
    return Transition(state=state, applied=False)


def _bring_to_front(
    state: DesktopState, window_id: str, *, unminimize: bool
) -> Transition:
    before = state.windows.get(window_id)
    if before is None:
        return _unchanged(state)
    nxt = state.fork()
    update: dict[str, object] = {"z_index": nxt.allocator.next()}
    if unminimize:
        update["is_minimized"] = False
    nxt.windows = focus_exclusive(nxt.windows, window_id, update)
    return Transition(state=nxt, applied=True, before=before, after=nxt.windows[window_id])


def _patch(state: DesktopState, window_id: str, **changes: object) -> Transition:
    before = state.windows.get(window_id)
    if before is None:
        return _unchanged(state)
    nxt = state.fork()
    after = before.model_copy(update=changes)
    nxt.windows[window_id] = after
    return Transition(state=nxt, applied=True, before=before, after=after)


def open_window(state: DesktopState, spec: WindowSpec) -> Transition:
    """Create a window, or bring an existing one to the front.

    On the existing-id path the geometry carried by ``spec`` is ignored and a
    minimized window is restored.
    """
    if spec.id in state.windows:
        return _bring_to_front(state, spec.id, unminimize=True)
    nxt = state.fork()
    record = WindowRecord(
        **spec.model_dump(),
        is_minimized=False,
        is_maximized=False,
        is_focused=True,
        z_index=nxt.allocator.next(),
    )
    windows = focus_exclusive(nxt.windows, spec.id)
    windows[spec.id] = record
    nxt.windows = windows
    return Transition(state=nxt, applied=True, before=None, after=record)


def close_window(state: DesktopState, window_id: str) -> Transition:
    before = state.windows.get(window_id)
    if before is None:
        return _unchanged(state)
    nxt = state.fork()
    del nxt.windows[window_id]
    return Transition(state=nxt, applied=True, before=before, after=None)


def minimize_window(state: DesktopState, window_id: str) -> Transition:
    return _patch(state, window_id, is_minimized=True, is_focused=False)


def maximize_window(state: DesktopState, window_id: str) -> Transition:
    """Toggle the maximized flag."""
    before = state.windows.get(window_id)
    if before is None:
        return _unchanged(state)
    return _patch(state, window_id, is_maximized=not before.is_maximized)


def restore_window(state: DesktopState, window_id: str) -> Transition:
    return _bring_to_front(state, window_id, unminimize=True)


def focus_window(state: DesktopState, window_id: str) -> Transition:
    return _bring_to_front(state, window_id, unminimize=False)


def reposition_window(state: DesktopState, window_id: str, x: float, y: float) -> Transition:
    return _patch(state, window_id, x=x, y=y)


def resize_window(
    state: DesktopState, window_id: str, width: float, height: float
) -> Transition:
    return _patch(state, window_id, width=width, height=height)
