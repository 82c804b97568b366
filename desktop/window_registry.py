"""Authoritative window collection for one desktop session.

Every operation runs a pure transition from ``desktop.transitions`` against
the current state under a lock and commits the resulting state whole. Once the
lock is released the registry reports telemetry and then publishes
``windows_changed``; either can fail without touching the committed state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from core.event_bus import WINDOWS_CHANGED, EventBus
from desktop import transitions
from desktop.stack_order import DEFAULT_BASELINE_Z_INDEX, StackOrderAllocator
from desktop.transitions import Transition
from desktop.window_state import DesktopState, WindowRecord, WindowSpec, window_type
from telemetry.reporter import NullTelemetryReporter, TelemetryReporter, emit_safely

logger = logging.getLogger("webtop.desktop.registry")

ACTIVE_WINDOWS_GAUGE = "desktop.windows.active"

TransitionHook = Callable[[Transition, int], None]


class WindowRegistry:
    """Owns window records and the stacking-order allocator."""

    def __init__(
        self,
        baseline_z_index: int = DEFAULT_BASELINE_Z_INDEX,
        reporter: TelemetryReporter | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._state = DesktopState(allocator=StackOrderAllocator(baseline_z_index))
        self._lock = threading.Lock()
        self.reporter = reporter if reporter is not None else NullTelemetryReporter()
        self.event_bus = event_bus

    # -- read surface -------------------------------------------------

    @property
    def windows(self) -> list[WindowRecord]:
        """Snapshot of all records; order carries no meaning."""
        return list(self._state.windows.values())

    @property
    def top_z_index(self) -> int:
        return self._state.top_z_index

    def get(self, window_id: str) -> WindowRecord | None:
        return self._state.windows.get(window_id)

    def focused_window(self) -> WindowRecord | None:
        return next((w for w in self._state.windows.values() if w.is_focused), None)

    def stacking_order(self) -> list[WindowRecord]:
        """Records sorted bottom-most first."""
        return sorted(self._state.windows.values(), key=lambda w: w.z_index)

    def snapshot(self) -> dict[str, Any]:
        state = self._state
        return {
            "windows": [record.to_view() for record in state.windows.values()],
            "topZIndex": state.top_z_index,
        }

    def __len__(self) -> int:
        return len(self._state.windows)

    def __contains__(self, window_id: object) -> bool:
        return window_id in self._state.windows

    # -- operations ---------------------------------------------------

    def open(self, spec: WindowSpec | Mapping[str, Any]) -> WindowRecord:
        """Open a new window, or bring an existing one to the front.

        For an id that is already open the geometry in ``spec`` is ignored;
        the window is focused, raised and un-minimized.
        """
        if not isinstance(spec, WindowSpec):
            spec = WindowSpec.model_validate(dict(spec))
        window_spec = spec
        transition = self._run(
            "open",
            window_spec.id,
            lambda state: transitions.open_window(state, window_spec),
            self._report_open,
        )
        return transition.state.windows[window_spec.id]

    def close(self, window_id: str) -> None:
        self._run(
            "close",
            window_id,
            lambda state: transitions.close_window(state, window_id),
            self._report_close,
        )

    def minimize(self, window_id: str) -> None:
        self._run(
            "minimize",
            window_id,
            lambda state: transitions.minimize_window(state, window_id),
            self._report_minimize,
        )

    def maximize(self, window_id: str) -> None:
        """Toggle the maximized flag."""
        self._run(
            "maximize",
            window_id,
            lambda state: transitions.maximize_window(state, window_id),
            self._report_maximize,
        )

    # restore and focus send no telemetry, only the change notification.
    def restore(self, window_id: str) -> None:
        self._run("restore", window_id, lambda state: transitions.restore_window(state, window_id))

    def focus(self, window_id: str) -> None:
        self._run("focus", window_id, lambda state: transitions.focus_window(state, window_id))

    def reposition(self, window_id: str, x: float, y: float) -> None:
        self._run(
            "reposition",
            window_id,
            lambda state: transitions.reposition_window(state, window_id, x, y),
        )

    def resize(self, window_id: str, width: float, height: float) -> None:
        self._run(
            "resize",
            window_id,
            lambda state: transitions.resize_window(state, window_id, width, height),
        )

    # -- internals ----------------------------------------------------

    def _run(
        self,
        operation: str,
        window_id: str,
        apply: Callable[[DesktopState], Transition],
        report: TransitionHook | None = None,
    ) -> Transition:
        with self._lock:
            transition = apply(self._state)
            if not transition.applied:
                return transition
            self._state = transition.state
        count = len(transition.state.windows)
        top = transition.state.top_z_index
        logger.debug("%s %s applied (top z-index %d)", operation, window_id, top)
        if report is not None:
            report(transition, count)
        self._notify(operation, window_id, top)
        return transition

    def _notify(self, operation: str, window_id: str, top: int) -> None:
        if self.event_bus is None:
            return
        try:
            self.event_bus.emit(
                WINDOWS_CHANGED,
                {"operation": operation, "window_id": window_id, "top_z_index": top},
            )
        except Exception as exc:
            logger.warning("windows_changed subscriber failed after %s: %s", operation, exc)

    def _emit(self, event: str, fields: dict[str, Any], counter: str, tags: dict[str, str]) -> None:
        emit_safely(self.reporter.log_event, event, fields)
        emit_safely(self.reporter.increment_counter, counter, 1, tags)

    def _report_open(self, transition: Transition, count: int) -> None:
        record = transition.after
        if record is None:
            return
        tags = {"window_type": window_type(record.id)}
        if transition.created:
            self._emit(
                "window_opened",
                {
                    "window_id": record.id,
                    "window_title": record.title,
                    "window_icon": record.icon,
                    "dimensions": {
                        "width": record.width,
                        "height": record.height,
                        "x": record.x,
                        "y": record.y,
                    },
                },
                "desktop.windows.opened",
                tags,
            )
            emit_safely(self.reporter.record_gauge, ACTIVE_WINDOWS_GAUGE, count)
        elif transition.before is not None:
            self._emit(
                "window_focused",
                {"window_id": record.id, "was_minimized": transition.before.is_minimized},
                "desktop.windows.focused",
                tags,
            )

    def _report_close(self, transition: Transition, count: int) -> None:
        record = transition.before
        if record is None:
            return
        self._emit(
            "window_closed",
            {"window_id": record.id, "window_title": record.title},
            "desktop.windows.closed",
            {"window_type": window_type(record.id)},
        )
        emit_safely(self.reporter.record_gauge, ACTIVE_WINDOWS_GAUGE, count)

    def _report_minimize(self, transition: Transition, count: int) -> None:
        record = transition.before
        if record is None:
            return
        self._emit(
            "window_minimized",
            {"window_id": record.id, "window_title": record.title},
            "desktop.windows.minimized",
            {"window_type": window_type(record.id)},
        )

    def _report_maximize(self, transition: Transition, count: int) -> None:
        record = transition.after
        if record is None:
            return
        maximized = record.is_maximized
        self._emit(
            "window_maximized",
            {"window_id": record.id, "window_title": record.title, "is_maximized": maximized},
            "desktop.windows.maximized",
            {
                "window_type": window_type(record.id),
                "action": "maximize" if maximized else "restore",
            },
        )
