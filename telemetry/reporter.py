"""Telemetry reporter interface and in-process implementations."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger("webtop.telemetry")


@dataclass
class TelemetryRecord:
    """One captured telemetry call."""

    kind: str
    name: str
    value: float | None = None
    fields: dict[str, Any] = field(default_factory=dict)
    tags: dict[str, str] = field(default_factory=dict)


class TelemetryReporter:
    """Base reporter. Every method is best-effort and returns nothing."""

    def log_event(self, name: str, fields: Mapping[str, Any] | None = None) -> None:
        _ = (name, fields)

    def increment_counter(
        self, name: str, amount: float = 1, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = (name, amount, tags)

    def record_gauge(self, name: str, value: float) -> None:
        _ = (name, value)

    def record_distribution(
        self, name: str, value: float, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = (name, value, tags)


class NullTelemetryReporter(TelemetryReporter):
    """Reporter that drops all telemetry."""


class LoggingTelemetryReporter(TelemetryReporter):
    """Writes telemetry as structured log lines."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.log = log or logger
        self.level = level

    def _emit(self, kind: str, name: str, payload: Mapping[str, Any]) -> None:
        self.log.log(
            self.level,
            "%s %s %s",
            kind,
            name,
            json.dumps(dict(payload), sort_keys=True, default=str),
        )

    def log_event(self, name: str, fields: Mapping[str, Any] | None = None) -> None:
        self._emit("event", name, fields or {})

    def increment_counter(
        self, name: str, amount: float = 1, tags: Mapping[str, str] | None = None
    ) -> None:
        self._emit("counter", name, {"amount": amount, "tags": dict(tags or {})})

    def record_gauge(self, name: str, value: float) -> None:
        self._emit("gauge", name, {"value": value})

    def record_distribution(
        self, name: str, value: float, tags: Mapping[str, str] | None = None
    ) -> None:
        self._emit("distribution", name, {"value": value, "tags": dict(tags or {})})


class RecordingTelemetryReporter(TelemetryReporter):
    """Keeps every call in memory for inspection."""

    def __init__(self) -> None:
        self.records: list[TelemetryRecord] = []

    def log_event(self, name: str, fields: Mapping[str, Any] | None = None) -> None:
        self.records.append(TelemetryRecord("event", name, fields=dict(fields or {})))

    def increment_counter(
        self, name: str, amount: float = 1, tags: Mapping[str, str] | None = None
    ) -> None:
        self.records.append(TelemetryRecord("counter", name, value=amount, tags=dict(tags or {})))

    def record_gauge(self, name: str, value: float) -> None:
        self.records.append(TelemetryRecord("gauge", name, value=value))

    def record_distribution(
        self, name: str, value: float, tags: Mapping[str, str] | None = None
    ) -> None:
        self.records.append(
            TelemetryRecord("distribution", name, value=value, tags=dict(tags or {}))
        )

    def named(self, name: str) -> list[TelemetryRecord]:
        return [record for record in self.records if record.name == name]

    def clear(self) -> None:
        self.records.clear()


class FanoutTelemetryReporter(TelemetryReporter):
    """Forwards each call to several reporters; one failing sink does not stop the rest."""

    def __init__(self, reporters: Sequence[TelemetryReporter]) -> None:
        self.reporters = list(reporters)

    def log_event(self, name: str, fields: Mapping[str, Any] | None = None) -> None:
        for reporter in self.reporters:
            emit_safely(reporter.log_event, name, fields)

    def increment_counter(
        self, name: str, amount: float = 1, tags: Mapping[str, str] | None = None
    ) -> None:
        for reporter in self.reporters:
            emit_safely(reporter.increment_counter, name, amount, tags)

    def record_gauge(self, name: str, value: float) -> None:
        for reporter in self.reporters:
            emit_safely(reporter.record_gauge, name, value)

    def record_distribution(
        self, name: str, value: float, tags: Mapping[str, str] | None = None
    ) -> None:
        for reporter in self.reporters:
            emit_safely(reporter.record_distribution, name, value, tags)


def emit_safely(call: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    """Invoke a reporter method, logging and discarding any failure."""
    try:
        call(*args, **kwargs)
    except Exception as exc:
        logger.warning("Telemetry call %s failed: %s", getattr(call, "__name__", call), exc)


def build_reporter(config: Mapping[str, Any], root: Path | None = None) -> TelemetryReporter:
    """Create the reporter selected by the ``telemetry`` config section."""
    telemetry_cfg = dict(config.get("telemetry", {}) or {})
    if not telemetry_cfg.get("enabled", True):
        return NullTelemetryReporter()

    sink = str(telemetry_cfg.get("sink", "log")).lower()
    if sink == "null":
        return NullTelemetryReporter()
    if sink == "memory":
        return RecordingTelemetryReporter()
    if sink == "log":
        return LoggingTelemetryReporter()
    if sink == "jsonl":
        from telemetry.jsonl_reporter import JsonlTelemetryReporter

        base = root or Path.cwd()
        path = (base / str(telemetry_cfg.get("jsonl_path", "logs/telemetry.jsonl"))).resolve()
        return JsonlTelemetryReporter(path)
    raise ValueError(f"Unknown telemetry sink: {sink}")
