"""
app/observability.py

Structured event sinks for the analytics pipeline.

Services emit named events with keyword fields through an injected sink
instead of logging directly, so tests can assert on what happened.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


class EventSink(Protocol):
    def emit(self, event: str, **fields: Any) -> None:
        ...


class LoggingEventSink:
    """
    Forward events to the standard logging module as JSON lines.

    Events whose name ends in ``_rejected`` or ``_failed`` are logged at
    WARNING, everything else at INFO.
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def emit(self, event: str, **fields: Any) -> None:
        level = logging.WARNING if event.endswith(("_rejected", "_failed")) else logging.INFO
        log_event(self._logger, level, event, **fields)


@dataclass(frozen=True)
class RecordedEvent:
    name: str
    fields: dict[str, Any]


@dataclass
class RecordingEventSink:
    """
    Keep emitted events in memory, in order.
    """

    events: list[RecordedEvent] = field(default_factory=list)

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append(RecordedEvent(name=event, fields=dict(fields)))

    def names(self) -> list[str]:
        return [event.name for event in self.events]
