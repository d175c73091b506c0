"""The chat service entry point: log startup and wait for a stop signal."""

from __future__ import annotations

import os
import signal
import sys
import threading
from typing import Optional, Sequence

from .logger import Logger, new_logger
from .model import Level


def run(log: Logger, shutdown: threading.Event) -> None:
    """Log startup, then block until shutdown is set."""
    log.info("startup", "CPUS", os.cpu_count())
    log.info("startup", "status", "started")
    try:
        shutdown.wait()
    finally:
        log.info("startup", "status", "shutting down")


def main(argv: Optional[Sequence[str]] = None) -> int:
    log = new_logger(sys.stdout, Level.INFO, "CAP", lambda: "")
    shutdown = threading.Event()

    def _stop(signum, frame):
        shutdown.set()

    previous = {s: signal.signal(s, _stop) for s in (signal.SIGINT, signal.SIGTERM)}
    try:
        run(log, shutdown)
    except Exception as err:
        log.error("startup", "err", err)
        return 1
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())