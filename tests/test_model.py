from datetime import datetime

from capchat.model import Events, Level, Record


def _debug(record):
    return "debug"


def _info(record):
    return "info"


def _warn(record):
    return "warn"


def _error(record):
    return "error"


def test_level_ordering():
    events = Events(debug=_debug, info=_info, warn=_warn, error=_error)
    ordered = sorted([Level.ERROR, Level.DEBUG, Level.WARN, Level.INFO])
    assert [events.for_level(level) for level in ordered] == [
        _debug,
        _info,
        _warn,
        _error,
    ]
    assert events.for_level(0) is _info


def test_events_has_any():
    assert Events().has_any() is False
    assert Events(warn=lambda r: None).has_any() is True


def test_record_defaults():
    r = Record(datetime.now(), "m", Level.INFO)
    assert r.attributes == {}
    assert r.source is None