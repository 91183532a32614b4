# ean_reconcile/models/events.py

"""
Run events.

A RunLog is handed into a run by the caller and only ever appended to.
Every event is also forwarded to the standard logging tree so console or
file handlers pick it up without touching the run.
"""

import logging
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

EventLevel = Literal["info", "warning", "error"]

_LOG_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class RunEvent(BaseModel):
    """A single message produced during a run."""

    level: EventLevel
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)

    def format(self) -> str:
        return f"{self.timestamp:%Y-%m-%d %H:%M:%S} [{self.level.upper()}] {self.message}"


class RunLog:
    """Append-only event channel for one run."""

    def __init__(self, logger: logging.Logger | None = None):
        self._events: list[RunEvent] = []
        self._logger = logger or logging.getLogger("ean_reconcile.run")

    def emit(self, level: EventLevel, message: str) -> RunEvent:
        event = RunEvent(level=level, message=message)
        self._events.append(event)
        self._logger.log(_LOG_LEVELS[level], message)
        return event

    def info(self, message: str) -> RunEvent:
        return self.emit("info", message)

    def warning(self, message: str) -> RunEvent:
        return self.emit("warning", message)

    def error(self, message: str) -> RunEvent:
        return self.emit("error", message)

    @property
    def events(self) -> list[RunEvent]:
        return list(self._events)

    @property
    def warnings(self) -> list[str]:
        return [e.message for e in self._events if e.level == "warning"]

    @property
    def errors(self) -> list[str]:
        return [e.message for e in self._events if e.level == "error"]

    def format_lines(self) -> list[str]:
        return [e.format() for e in self._events]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(list(self._events))
