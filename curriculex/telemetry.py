"""
Telemetry sinks for non-fatal index warnings.

The index never raises for soft errors (unknown vocabulary ids, out-of-range
step indexes). It reports them through a sink with a single
``warn(context, **details)`` method instead.
"""

import logging
from typing import Any, Protocol


logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    def warn(self, context: str, **details: Any) -> None:
        ...


class LoggingTelemetry:
    """Forward warnings to the standard logging system."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def warn(self, context: str, **details: Any) -> None:
        rendered = ", ".join(f"{key}={value!r}" for key, value in details.items())
        self.log.warning(f"{context}: {rendered}" if rendered else context)


class RecordingTelemetry:
    """Keep warnings in memory, in the order they were reported."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warn(self, context: str, **details: Any) -> None:
        self.events.append((context, dict(details)))

    def contexts(self) -> list[str]:
        return [context for context, _ in self.events]

    def clear(self) -> None:
        self.events.clear()
