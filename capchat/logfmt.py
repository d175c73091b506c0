"""Turns structured JSON log lines into readable text."""

from __future__ import annotations

import argparse
import json
import signal
import sys
from typing import Any, Iterable, Iterator, Optional, Sequence

_DEFAULT_TRACE = "00000000-0000-0000-0000-000000000000"
_KNOWN = ("service", "time", "file", "level", "trace_id", "msg")
_MISSING = "%!s(<nil>)"


def _fmt(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def format_line(line: str, service: str = "") -> Optional[str]:
    """Format one log line; None means the line is filtered out."""
    service = service.lower()
    try:
        m = json.loads(line)
    except ValueError:
        m = None
    if not isinstance(m, dict):
        return None if service else line

    if service and str(m.get("service", "")).lower() != service:
        return None

    trace_id = _fmt(m["trace_id"]) if "trace_id" in m else _DEFAULT_TRACE
    head = [
        _fmt(m[k]) if k in m else _MISSING
        for k in ("service", "time", "file", "level")
    ]
    head.append(trace_id)
    head.append(_fmt(m["msg"]) if "msg" in m else _MISSING)
    parts = head + [f"{k}[{_fmt(v)}]" for k, v in m.items() if k not in _KNOWN]
    return ": ".join(parts)


def format_stream(lines: Iterable[str], service: str = "") -> Iterator[str]:
    """Yield formatted lines, skipping filtered ones."""
    for line in lines:
        out = format_line(line.rstrip("\r\n"), service)
        if out is not None:
            yield out


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Make structured logs readable.")
    parser.add_argument("--service", "-service", default="", help="filter which service to see")
    args = parser.parse_args(argv)

    # Keep reading on interrupt so the upstream's final lines are shown.
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        for out in format_stream(sys.stdin, args.service):
            print(out)
    except OSError as err:
        print(err, file=sys.stderr)
    finally:
        signal.signal(signal.SIGINT, previous)
    return 0


if __name__ == "__main__":
    sys.exit(main())