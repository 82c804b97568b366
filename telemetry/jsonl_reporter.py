"""Structured JSONL telemetry sink."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from telemetry.reporter import TelemetryReporter


class JsonlTelemetryReporter(TelemetryReporter):
    """Appends each telemetry call to a file as one JSON line."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("webtop.telemetry.jsonl")

    def _write(self, kind: str, name: str, **payload: Any) -> None:
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "kind": kind,
            "name": name,
            **payload,
        }
        line = json.dumps(entry, ensure_ascii=True, default=str)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        self.logger.debug(line)

    def log_event(self, name: str, fields: Mapping[str, Any] | None = None) -> None:
        self._write("event", name, fields=dict(fields or {}))

    def increment_counter(
        self, name: str, amount: float = 1, tags: Mapping[str, str] | None = None
    ) -> None:
        self._write("counter", name, value=amount, tags=dict(tags or {}))

    def record_gauge(self, name: str, value: float) -> None:
        self._write("gauge", name, value=value)

    def record_distribution(
        self, name: str, value: float, tags: Mapping[str, str] | None = None
    ) -> None:
        self._write("distribution", name, value=value, tags=dict(tags or {}))

    def read_entries(self) -> list[dict[str, Any]]:
        """Return all entries written so far."""
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
