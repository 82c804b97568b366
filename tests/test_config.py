"""Configuration and session wiring tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import baseline_z_index, load_effective_config, load_yaml, merge_dicts
from core.event_bus import WINDOWS_CHANGED
from core.orchestrator import Orchestrator
from telemetry.reporter import NullTelemetryReporter, RecordingTelemetryReporter


def write_config(root: Path, name: str, text: str) -> None:
    config_dir = root / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / name).write_text(text, encoding="utf-8")


def test_load_yaml_missing_file_is_empty(tmp_path: Path) -> None:
    assert load_yaml(tmp_path / "absent.yaml") == {}


def test_load_yaml_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(path)


def test_merge_dicts_is_recursive() -> None:
    merged = merge_dicts(
        {"telemetry": {"sink": "log", "enabled": True}, "logging": {"level": "INFO"}},
        {"telemetry": {"sink": "jsonl"}},
    )
    assert merged == {
        "telemetry": {"sink": "jsonl", "enabled": True},
        "logging": {"level": "INFO"},
    }


def test_defaults_apply_without_config_files(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path)
    assert config["desktop"]["baseline_z_index"] == 100
    assert config["telemetry"]["sink"] == "log"


def test_local_yaml_overrides_default(tmp_path: Path) -> None:
    write_config(tmp_path, "default.yaml", "desktop:\n  baseline_z_index: 200\n")
    write_config(tmp_path, "local.yaml", "telemetry:\n  sink: null\n")
    config = load_effective_config(tmp_path)
    assert config["desktop"]["baseline_z_index"] == 200
    # YAML null is not the string "null"
    assert config["telemetry"]["sink"] is None
    assert config["telemetry"]["enabled"] is True


@pytest.mark.parametrize("value", [-5, "high", 2.5, False])
def test_invalid_baseline_is_rejected(tmp_path: Path, value: object) -> None:
    with pytest.raises(ValueError):
        load_effective_config(tmp_path, {"desktop": {"baseline_z_index": value}})
    with pytest.raises(ValueError):
        baseline_z_index({"desktop": {"baseline_z_index": value}})


def test_shipped_default_config_loads() -> None:
    root = Path(__file__).resolve().parents[1]
    config = load_effective_config(root)
    assert config["desktop"]["baseline_z_index"] == 100
    assert config["logging"]["format"] in {"text", "json"}


def test_orchestrator_builds_wired_session(tmp_path: Path) -> None:
    write_config(tmp_path, "default.yaml", "desktop:\n  baseline_z_index: 10\n")
    reporter = RecordingTelemetryReporter()
    session = Orchestrator(root=tmp_path).build(reporter=reporter)

    changes: list[dict[str, object]] = []
    session.event_bus.subscribe(WINDOWS_CHANGED, changes.append)
    record = session.registry.open({"id": "notes-1", "title": "Notes"})

    assert record.z_index == 11
    assert reporter.named("window_opened")
    assert changes == [{"operation": "open", "window_id": "notes-1", "top_z_index": 11}]


def test_orchestrator_sessions_do_not_share_state(tmp_path: Path) -> None:
    orchestrator = Orchestrator(root=tmp_path, overrides={"telemetry": {"enabled": False}})
    first = orchestrator.build()
    second = orchestrator.build()

    first.registry.open({"id": "notes-1", "title": "Notes"})
    assert isinstance(first.reporter, NullTelemetryReporter)
    assert second.registry.windows == []
    assert second.registry.top_z_index == 100
    assert first.event_bus is not second.event_bus
