"""Structured logger writing JSON records."""

from __future__ import annotations

import json
import logging
import platform
import sys
from datetime import datetime
from importlib import metadata
from typing import Any, Callable, Optional, TextIO

from .handler import EventHandler, Handler, JSONHandler, source_to_file
from .model import Events, Level, Record

TraceIDFn = Callable[[], str]

_BADKEY = "!BADKEY"


def _to_attrs(args: tuple) -> dict[str, Any]:
    attrs: dict[str, Any] = {}
    rest = iter(args)
    for first in rest:
        if isinstance(first, str):
            sentinel = object()
            value = next(rest, sentinel)
            if value is sentinel:
                attrs[_BADKEY] = first
            else:
                attrs[first] = value
        else:
            attrs[_BADKEY] = first
    return attrs


def quote_key(key: str) -> bool:
    """Report whether key must be quoted."""
    return len(key) == 0 or any(c in key for c in '= \t\r\n"`')


def quote_value(value: str) -> bool:
    """Report whether value must be quoted."""
    return any(c in value for c in ' \t\r\n"`')


class Logger:
    """Logs messages with key/value attributes through a handler."""

    def __init__(self, handler: Handler, trace_id_fn: Optional[TraceIDFn] = None) -> None:
        self.handler = handler
        self.trace_id_fn = trace_id_fn

    def debug(self, msg: str, *args: Any) -> None:
        self._write(Level.DEBUG, 3, msg, args)

    def debugc(self, caller: int, msg: str, *args: Any) -> None:
        self._write(Level.DEBUG, caller, msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._write(Level.INFO, 3, msg, args)

    def infoc(self, caller: int, msg: str, *args: Any) -> None:
        self._write(Level.INFO, caller, msg, args)

    def warn(self, msg: str, *args: Any) -> None:
        self._write(Level.WARN, 3, msg, args)

    def warnc(self, caller: int, msg: str, *args: Any) -> None:
        self._write(Level.WARN, caller, msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._write(Level.ERROR, 3, msg, args)

    def errorc(self, caller: int, msg: str, *args: Any) -> None:
        self._write(Level.ERROR, caller, msg, args)

    def _write(self, level: Level, caller: int, msg: str, args: tuple) -> None:
        if not self.handler.enabled(level):
            return
        frame = sys._getframe(0)
        for _ in range(max(caller - 1, 0)):
            if frame is None:
                break
            frame = frame.f_back
        source = (frame.f_code.co_filename, frame.f_lineno) if frame is not None else None
        if self.trace_id_fn is not None:
            args = args + ("trace_id", self.trace_id_fn())
        record = Record(datetime.now().astimezone(), msg, level, _to_attrs(args), source)
        self.handler.handle(record)

    def build_info(self) -> None:
        """Log information about the running interpreter and package."""
        settings = [
            ("implementation", sys.implementation.name),
            ("executable", sys.executable),
            ("platform", sys.platform),
        ]
        values: list[Any] = []
        for key, value in settings:
            values.append(json.dumps(key) if quote_key(key) else key)
            values.append(json.dumps(value) if quote_value(value) else value)
        try:
            modversion = metadata.version("capchat")
        except metadata.PackageNotFoundError:
            modversion = "(devel)"
        values += ["pythonversion", platform.python_version(), "modversion", modversion]
        self._write(Level.INFO, 3, "build info", tuple(values))


def new_logger(
    stream: TextIO,
    min_level: int,
    service_name: str,
    trace_id_fn: Optional[TraceIDFn] = None,
    events: Optional[Events] = None,
) -> Logger:
    """Build a JSON logger that tags every record with the service name."""
    handler: Handler = JSONHandler(
        stream, level=min_level, add_source=True, replace_attr=source_to_file
    )
    if events is not None and events.has_any():
        handler = EventHandler(handler, events)
    handler = handler.with_attrs({"service": service_name})
    return Logger(handler, trace_id_fn)


def new_with_handler(handler: Handler) -> Logger:
    """Build a logger over an existing handler."""
    return Logger(handler)


class _Bridge(logging.Handler):
    def __init__(self, target: Handler, level: int) -> None:
        super().__init__()
        self._target = target
        self._fixed = level

    def emit(self, record: logging.LogRecord) -> None:
        if not self._target.enabled(self._fixed):
            return
        self._target.handle(
            Record(
                datetime.fromtimestamp(record.created).astimezone(),
                record.getMessage(),
                self._fixed,
                {},
                (record.pathname, record.lineno),
            )
        )


def new_std_logger(logger: Logger, level: int) -> logging.Logger:
    """Return a standard library logger whose output goes to logger at level."""
    std = logging.Logger(f"capchat.std.{id(logger)}", logging.DEBUG)
    std.propagate = False
    std.addHandler(_Bridge(logger.handler, level))
    return std