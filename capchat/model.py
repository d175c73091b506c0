"""Log levels, records and per-level event hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Callable, Optional


class Level(IntEnum):
    """Severity levels, spaced so that custom levels can sit in between."""

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8


@dataclass
class Record:
    """The data that is being logged."""

    time: datetime
    message: str
    level: int
    attributes: dict[str, Any] = field(default_factory=dict)
    source: Optional[tuple[str, int]] = None


EventFn = Callable[[Record], None]


@dataclass
class Events:
    """Functions to run when a record of a matching level is logged."""

    debug: Optional[EventFn] = None
    info: Optional[EventFn] = None
    warn: Optional[EventFn] = None
    error: Optional[EventFn] = None

    def has_any(self) -> bool:
        """Report whether any event function is set."""
        return any(fn is not None for fn in (self.debug, self.info, self.warn, self.error))

    def for_level(self, level: int) -> Optional[EventFn]:
        """Return the event function for exactly this level, if any."""
        return {
            Level.DEBUG: self.debug,
            Level.INFO: self.info,
            Level.WARN: self.warn,
            Level.ERROR: self.error,
        }.get(level)