"""Builds an independent desktop session from configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.config import baseline_z_index, load_effective_config
from core.event_bus import EventBus
from desktop.window_registry import WindowRegistry
from telemetry.reporter import TelemetryReporter, build_reporter


@dataclass
class DesktopSession:
    """Holds the initialized components of one desktop session."""

    config: dict[str, Any]
    reporter: TelemetryReporter
    event_bus: EventBus
    registry: WindowRegistry


class Orchestrator:
    """Creates and wires session components for CLI and embedding use."""

    def __init__(self, root: Path | None = None, overrides: dict[str, Any] | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self.overrides = overrides or {}

    def build(self, reporter: TelemetryReporter | None = None) -> DesktopSession:
        """Create a fresh session; nothing is shared with earlier builds."""
        config = load_effective_config(self.root, self.overrides)
        if reporter is None:
            reporter = build_reporter(config, root=self.root)
        event_bus = EventBus()
        registry = WindowRegistry(
            baseline_z_index=baseline_z_index(config),
            reporter=reporter,
            event_bus=event_bus,
        )
        return DesktopSession(
            config=config,
            reporter=reporter,
            event_bus=event_bus,
            registry=registry,
        )
