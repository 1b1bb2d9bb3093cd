import io
import json
from datetime import datetime, timezone

from plumbline.model import Level, SignalResult, Status
from plumbline.report.events import EventEmitter

FIXED = datetime(2026, 4, 28, 15, 0, 0, tzinfo=timezone.utc)


def _emitter(buf, enabled=True):
    return EventEmitter(buf, enabled, clock=lambda: FIXED)


def test_ndjson_lines_have_event_and_ts():
    buf = io.StringIO()
    e = _emitter(buf)
    e.scan_start("/abs/path", 22)
    e.signal_start("l2.claude-md")
    e.signal_complete(SignalResult(id="l2.claude-md", status=Status.FOUND, score=1.0), 5)
    e.scan_complete(Level.INSTRUCTED, 100)

    lines = buf.getvalue().rstrip("\n").split("\n")
    assert len(lines) == 4
    for line in lines:
        ev = json.loads(line)
        assert "event" in ev
        assert "ts" in ev


def test_disabled_is_noop():
    buf = io.StringIO()
    e = EventEmitter(buf, False)
    e.scan_start("/x", 5)
    e.scan_complete(Level.INSTRUCTED, 100)
    assert buf.getvalue() == ""


def test_fixed_clock_timestamp_and_fields():
    buf = io.StringIO()
    e = _emitter(buf)
    e.scan_start("/repo", 3)
    ev = json.loads(buf.getvalue())
    assert ev == {
        "event": "scan.start",
        "repo": "/repo",
        "signal_count": 3,
        "ts": "2026-04-28T15:00:00Z",
    }


def test_signal_complete_payload():
    buf = io.StringIO()
    e = _emitter(buf)
    e.signal_complete(
        SignalResult(id="l3.x", status=Status.PARTIAL, score=0.67), 12
    )
    ev = json.loads(buf.getvalue())
    assert ev["event"] == "signal.complete"
    assert ev["id"] == "l3.x"
    assert ev["status"] == "partial"
    assert ev["score"] == 0.67
    assert ev["duration_ms"] == 12


def test_scan_complete_level_is_number():
    buf = io.StringIO()
    e = _emitter(buf)
    e.scan_complete(Level.MEASURED, 7)
    ev = json.loads(buf.getvalue())
    assert ev["level"] == 3
    assert ev["duration_ms"] == 7


def test_fractional_seconds_are_trimmed():
    buf = io.StringIO()
    moment = datetime(2026, 1, 2, 3, 4, 5, 120000, tzinfo=timezone.utc)
    e = EventEmitter(buf, True, clock=lambda: moment)
    e.signal_start("a")
    assert json.loads(buf.getvalue())["ts"] == "2026-01-02T03:04:05.12Z"