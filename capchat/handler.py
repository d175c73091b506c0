"""Handlers that format records as JSON and fire level events."""

from __future__ import annotations

import copy
import json
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional, TextIO, Union

from .model import Events, Level, Record

ReplaceFn = Callable[[str, Any], tuple[str, Any]]
Attrs = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


def _level_name(level: int) -> str:
    if level < Level.INFO:
        base, name = Level.DEBUG, "DEBUG"
    elif level < Level.WARN:
        base, name = Level.INFO, "INFO"
    elif level < Level.ERROR:
        base, name = Level.WARN, "WARN"
    else:
        base, name = Level.ERROR, "ERROR"
    offset = int(level) - int(base)
    return f"{name}{offset:+d}" if offset else name


def _items(attrs: Attrs) -> list[tuple[str, Any]]:
    return list(attrs.items()) if isinstance(attrs, Mapping) else list(attrs)


def source_to_file(key: str, value: Any) -> tuple[str, Any]:
    """Replace a source attribute by a "file" attribute of the form name.ext:line."""
    if key == "source" and isinstance(value, tuple) and len(value) == 2:
        path, line = value
        return "file", f"{os.path.basename(path)}:{line}"
    return key, value


class Handler(ABC):
    """Interface every record handler provides."""

    @abstractmethod
    def enabled(self, level: int) -> bool:
        """Report whether records at this level are handled."""

    @abstractmethod
    def with_attrs(self, attrs: Attrs) -> "Handler":
        """Return a handler that adds these attributes to every record."""

    @abstractmethod
    def with_group(self, name: str) -> "Handler":
        """Return a handler that qualifies later attributes by this group."""

    @abstractmethod
    def handle(self, record: Record) -> None:
        """Process one record."""


class JSONHandler(Handler):
    """Writes each record as one line of JSON."""

    def __init__(
        self,
        stream: TextIO,
        level: int = Level.INFO,
        add_source: bool = False,
        replace_attr: Optional[ReplaceFn] = None,
    ) -> None:
        self._stream = stream
        self._level = level
        self._add_source = add_source
        self._replace = replace_attr or (lambda k, v: (k, v))
        self._preset: list[tuple[tuple[str, ...], str, Any]] = []
        self._groups: tuple[str, ...] = ()

    def enabled(self, level: int) -> bool:
        return level >= self._level

    def with_attrs(self, attrs: Attrs) -> "JSONHandler":
        clone = copy.copy(self)
        clone._preset = self._preset + [(self._groups, k, v) for k, v in _items(attrs)]
        return clone

    def with_group(self, name: str) -> "JSONHandler":
        if not name:
            return self
        clone = copy.copy(self)
        clone._groups = self._groups + (name,)
        return clone

    def _place(self, out: dict, groups: tuple[str, ...], key: str, value: Any) -> None:
        key, value = self._replace(key, value)
        target = out
        for g in groups:
            target = target.setdefault(g, {})
        target[key] = value

    def handle(self, record: Record) -> None:
        out: dict[str, Any] = {}
        builtins = [
            ("time", record.time.astimezone().isoformat(timespec="milliseconds")),
            ("level", _level_name(record.level)),
        ]
        if self._add_source and record.source is not None:
            builtins.append(("source", record.source))
        builtins.append(("msg", record.message))
        for key, value in builtins:
            self._place(out, (), key, value)
        for groups, key, value in self._preset:
            self._place(out, groups, key, value)
        for key, value in record.attributes.items():
            self._place(out, self._groups, key, value)
        self._stream.write(json.dumps(out, default=str, ensure_ascii=False) + "\n")
        self._stream.flush()


class EventHandler(Handler):
    """Wraps a handler and runs the event function matching a record's level."""

    def __init__(self, handler: Handler, events: Events) -> None:
        self._handler = handler
        self._events = events

    def enabled(self, level: int) -> bool:
        return self._handler.enabled(level)

    def with_attrs(self, attrs: Attrs) -> "EventHandler":
        return EventHandler(self._handler.with_attrs(attrs), self._events)

    def with_group(self, name: str) -> "EventHandler":
        return EventHandler(self._handler.with_group(name), self._events)

    def handle(self, record: Record) -> None:
        fn = self._events.for_level(record.level)
        if fn is not None:
            fn(Record(record.time, record.message, Level(record.level), dict(record.attributes)))
        self._handler.handle(record)