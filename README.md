# capchat

Structured JSON logging for services, with per-level event callbacks. It
also ships a small service entry point that logs its startup and waits for
a stop signal, and a tool that turns the JSON log lines into readable text.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Logging from code

`capchat.logger.new_logger(stream, min_level, service_name, trace_id_fn=None, events=None)`
builds a `Logger` that writes one JSON object per line to `stream`. Each
line holds `time`, `level` (`DEBUG`, `INFO`, `WARN`, `ERROR`), `msg`, a
`file` field of the form `name.py:line` for the calling code, and
`service`. If `trace_id_fn` is given, it is called with no arguments for
every record and its result is added as `trace_id`. Records below
`min_level` are dropped.

```python
import sys

from capchat.logger import new_logger
from capchat.model import Level

log = new_logger(sys.stdout, Level.INFO, "CAP", lambda: "")
log.info("startup", "status", "started")
log.debug("not shown, below the minimum level")
```

Arguments after the message are alternating keys and values. A value
without a key, or a key that is not a string, is recorded under `!BADKEY`.

The levels are `capchat.model.Level.DEBUG`, `INFO`, `WARN` and `ERROR`.

### Level events

`capchat.model.Events` holds an optional callback for each of the four
levels (`debug`, `info`, `warn`, `error`). When a record at exactly that
level is logged, the callback receives a `Record` with `time`, `message`,
`level` and `attributes`; the record is then written as usual.

```python
import sys

from capchat.logger import new_logger
from capchat.model import Events, Level

errors = []
events = Events(error=lambda record: errors.append(record.message))
log = new_logger(sys.stdout, Level.INFO, "CAP", None, events)
log.error("boom", "err", "disk full")
```

### Other helpers

In `capchat.logger`:

- `Logger.debug`, `info`, `warn` and `error` log at their level;
  `debugc`, `infoc`, `warnc` and `errorc` take an explicit call-stack
  depth first, which chooses the frame reported in the `file` field.
- `Logger.build_info()` logs the interpreter implementation, executable,
  platform, Python version and the installed package version
  (`(devel)` when the package is not installed).
- `new_with_handler(handler)` wraps any `capchat.handler.Handler`.
- `new_std_logger(logger, level)` returns a standard `logging.Logger`
  whose messages go through the same handler at the given level.
- `quote_key(key)` and `quote_value(value)` report whether a key or value
  would need quoting in key=value output.

In `capchat.handler`:

- `Handler` is the abstract interface: `enabled`, `with_attrs`,
  `with_group` and `handle`.
- `JSONHandler(stream, level, add_source, replace_attr)` writes records as
  JSON lines; attributes added after `with_group(name)` are nested under
  that name.
- `EventHandler(handler, events)` runs the matching event callback before
  passing the record on.
- `source_to_file(key, value)` turns a `source` attribute into a `file`
  attribute holding the base file name and line.

## Commands

Start the service; it logs the CPU count and its startup, then waits for
SIGINT or SIGTERM and logs that it is shutting down:

```
capchat-cap
```

Make its JSON output readable:

```
capchat-cap | capchat-logfmt
```

Each JSON line becomes:

```
SERVICE: TIME: FILE: LEVEL: TRACE_ID: MESSAGE: key[value]: ...
```

The remaining keys follow in the order they appear in the line. A missing
field among the first six is shown as `%!s(<nil>)`; a missing trace id is
shown as the all-zero id `00000000-0000-0000-0000-000000000000`. Lines that
are not JSON objects are passed through unchanged. To see only one service,
filter by name; the match ignores case, and lines that are not JSON objects
are dropped while a filter is set:

```
capchat-cap | capchat-logfmt --service cap
```

`capchat-logfmt` ignores SIGINT while reading, so it keeps showing the
last lines the service writes as it shuts down.

The same functions are available in code as
`capchat.logfmt.format_line(line, service)` and
`capchat.logfmt.format_stream(lines, service)`.

## What it does not do

`capchat-cap` is only a startup skeleton: it does not accept connections or
handle any chat traffic, and the trace id it logs is always empty.