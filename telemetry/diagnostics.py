"""Fires a fixed batch of sample telemetry to check a reporter end to end."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from telemetry.reporter import TelemetryReporter

logger = logging.getLogger("webtop.telemetry.diagnostics")


def fire_sample_events(reporter: TelemetryReporter) -> dict[str, Any]:
    """Send one of each telemetry kind and summarize what was sent.

    Each structured event carries a ``level`` field (``info`` or ``warning``)
    since ``log_event`` has no severity of its own. Unlike the window
    registry, failures here are reported back to the caller instead of being
    swallowed silently.
    """
    try:
        logger.info("Diagnostics sample requested")
        reporter.log_event(
            "test_log_triggered",
            {
                "level": "info",
                "log_source": "diagnostics",
                "timestamp": datetime.now(UTC).isoformat(),
                "test_type": "manual_trigger",
                "message": "User triggered test log",
            },
        )
        reporter.log_event(
            "test_warning_triggered",
            {
                "level": "warning",
                "warning_type": "test",
                "severity": "medium",
                "message": "This is a test warning from diagnostics",
            },
        )
        reporter.increment_counter("diagnostics.sample", 1, {"test_type": "manual_trigger"})
        reporter.record_gauge("diagnostics.sample.gauge", 1)
        reporter.record_distribution(
            "diagnostics.sample.duration_ms", 0.0, {"test_type": "manual_trigger"}
        )
    except Exception as exc:
        logger.error("test_endpoint_error: %s", exc, exc_info=True)
        return {
            "success": False,
            "error": "Failed to send test events",
            "details": str(exc),
        }

    return {
        "success": True,
        "message": "Test telemetry sent.",
        "events_sent": {
            "structured_logs": 2,
            "counters": 1,
            "gauges": 1,
            "distributions": 1,
        },
    }
