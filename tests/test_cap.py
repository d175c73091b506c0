import io
import json
import threading

from capchat.cap import run
from capchat.logger import new_logger
from capchat.model import Level


def test_run_logs_start_and_stop():
    buf = io.StringIO()
    log = new_logger(buf, Level.INFO, "CAP")
    stop = threading.Event()
    stop.set()
    run(log, stop)
    lines = [json.loads(l) for l in buf.getvalue().splitlines()]
    assert [l.get("status") for l in lines] == [None, "started", "shutting down"]
    assert all(l["service"] == "CAP" for l in lines)


def test_run_waits_for_event():
    buf = io.StringIO()
    log = new_logger(buf, Level.INFO, "CAP")
    stop = threading.Event()
    t = threading.Thread(target=run, args=(log, stop))
    t.start()
    t.join(0.1)
    assert t.is_alive()
    stop.set()
    t.join(2)
    assert not t.is_alive()