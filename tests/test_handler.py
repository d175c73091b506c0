import io
import json
from datetime import datetime

from capchat.handler import EventHandler, JSONHandler, source_to_file
from capchat.model import Events, Level, Record


def _rec(level=Level.INFO, **attrs):
    return Record(datetime.now(), "hello", level, attrs, ("/a/b/main.py", 12))


def _lines(buf):
    return [json.loads(l) for l in buf.getvalue().splitlines()]


def test_source_to_file():
    assert source_to_file("source", ("/x/y/z.py", 7)) == ("file", "z.py:7")
    assert source_to_file("other", 3) == ("other", 3)


def test_json_basic_fields():
    buf = io.StringIO()
    JSONHandler(buf).handle(_rec(k="v"))
    (out,) = _lines(buf)
    assert out["level"] == "INFO"
    assert out["msg"] == "hello"
    assert out["k"] == "v"
    assert list(out)[:2] == ["time", "level"]


def test_json_source_replaced():
    buf = io.StringIO()
    JSONHandler(buf, add_source=True, replace_attr=source_to_file).handle(_rec())
    assert _lines(buf)[0]["file"] == "main.py:12"


def test_enabled_threshold():
    h = JSONHandler(io.StringIO(), level=Level.WARN)
    assert not h.enabled(Level.INFO)
    assert h.enabled(Level.ERROR)


def test_level_offset_name():
    buf = io.StringIO()
    JSONHandler(buf, level=Level.DEBUG).handle(_rec(level=Level.INFO + 2))
    assert _lines(buf)[0]["level"] == "INFO+2"


def test_attrs_and_groups():
    buf = io.StringIO()
    h = JSONHandler(buf).with_attrs({"service": "S"}).with_group("g").with_attrs([("a", 1)])
    h.handle(_rec(b=2))
    out = _lines(buf)[0]
    assert out["service"] == "S"
    assert out["g"] == {"a": 1, "b": 2}


def test_event_handler_fires_for_level():
    seen = []
    buf = io.StringIO()
    h = EventHandler(JSONHandler(buf), Events(warn=seen.append)).with_attrs({"x": 1})
    h.handle(_rec(level=Level.WARN, y=2))
    h.handle(_rec(level=Level.INFO))
    assert len(seen) == 1
    assert seen[0].attributes == {"y": 2}
    assert seen[0].level == Level.WARN
    assert len(_lines(buf)) == 2