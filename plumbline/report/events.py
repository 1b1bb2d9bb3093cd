"""Newline-delimited JSON progress events for an assessment run."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TextIO

from plumbline.model import Level, SignalResult


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _rfc3339(moment: datetime) -> str:
    """Format ``moment`` in UTC with trailing fractional zeros dropped."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    return text + "Z"


def _number(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class EventEmitter:
    """Writes one JSON object per line to ``stream``.

    A disabled emitter ignores every call, so callers need not check.
    ``clock`` supplies timestamps and may be replaced for stable output.
    Not safe for concurrent use.
    """

    def __init__(
        self,
        stream: TextIO,
        enabled: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.stream = stream
        self.enabled = enabled
        self.clock = clock or _utc_now

    def _emit(self, payload: dict[str, Any]) -> None:
        if not self.enabled:
            return
        payload["ts"] = _rfc3339(self.clock())
        line = json.dumps(
            payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        )
        self.stream.write(line + "\n")

    def scan_start(self, repo: str, signal_count: int) -> None:
        """Announce the start of a scan."""
        self._emit({"event": "scan.start", "repo": repo, "signal_count": signal_count})

    def signal_start(self, signal_id: str) -> None:
        """Announce that one signal's detection has begun."""
        self._emit({"event": "signal.start", "id": signal_id})

    def signal_complete(self, result: SignalResult, duration_ms: int) -> None:
        """Report one signal's outcome and how long it took."""
        self._emit(
            {
                "event": "signal.complete",
                "id": result.id,
                "status": str(result.status),
                "score": _number(result.score),
                "duration_ms": duration_ms,
            }
        )

    def scan_complete(self, level: Level, duration_ms: int) -> None:
        """Report the final level and total scan duration."""
        self._emit(
            {"event": "scan.complete", "level": int(level), "duration_ms": duration_ms}
        )