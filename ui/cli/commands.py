"""Typer command handlers."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import typer

from core.logging_setup import configure_logging
from core.orchestrator import DesktopSession, Orchestrator
from desktop.replay import apply_operation, apply_operations, load_script
from telemetry.diagnostics import fire_sample_events
from telemetry.reporter import RecordingTelemetryReporter, TelemetryReporter

DEMO_STEPS: list[tuple[str, dict[str, object]]] = [
    (
        "open notes-1",
        {"op": "open", "id": "notes-1", "title": "Notes", "icon": "notes",
         "x": 0, "y": 0, "width": 400, "height": 300},
    ),
    (
        "open calc-1",
        {"op": "open", "id": "calc-1", "title": "Calculator", "icon": "calc",
         "x": 40, "y": 40, "width": 240, "height": 320},
    ),
    ("minimize notes-1", {"op": "minimize", "id": "notes-1"}),
    ("reopen notes-1", {"op": "open", "id": "notes-1", "title": "Notes", "icon": "notes"}),
    ("close calc-1", {"op": "close", "id": "calc-1"}),
    ("focus notes-1", {"op": "focus", "id": "notes-1"}),
    ("focus notes-1 again", {"op": "focus", "id": "notes-1"}),
]


def _session(
    root: Path | None = None, reporter: TelemetryReporter | None = None
) -> DesktopSession:
    session = Orchestrator(root=root).build(reporter=reporter)
    logging_cfg = session.config.get("logging", {})
    configure_logging(
        level=str(logging_cfg.get("level", "INFO")),
        fmt=str(logging_cfg.get("format", "text")),
    )
    return session


def demo() -> None:
    """Run the reference scenario step by step."""
    session = _session()
    for label, step in DEMO_STEPS:
        apply_operation(session.registry, step)
        typer.echo(f"# {label}")
        typer.echo(json.dumps(session.registry.snapshot(), indent=2))


def replay(script: Path, show_telemetry: bool = False) -> None:
    """Apply a YAML operation script and print the final snapshot."""
    recorder = RecordingTelemetryReporter() if show_telemetry else None
    session = _session(reporter=recorder)
    try:
        steps = load_script(script)
        applied = apply_operations(session.registry, steps)
    except (OSError, ValueError, KeyError) as exc:
        typer.echo(f"Replay failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Applied {applied} operations")
    typer.echo(json.dumps(session.registry.snapshot(), indent=2))
    if recorder is not None:
        typer.echo(json.dumps([asdict(record) for record in recorder.records], indent=2))


def config_show() -> None:
    """Show effective runtime config."""
    session = _session()
    typer.echo(json.dumps(session.config, indent=2))


def telemetry_test() -> None:
    """Fire sample telemetry through the configured reporter."""
    session = _session()
    result = fire_sample_events(session.reporter)
    typer.echo(json.dumps(result, indent=2))
    if not result["success"]:
        raise typer.Exit(code=1)
