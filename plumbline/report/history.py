"""Append-only maturity history in newline-delimited JSON.

Each line is a compact verdict summary rather than a full report, so
the file stays small when appended to on every run.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, TextIO

from plumbline.model import Level, Report, Status


class HistoryError(Exception):
    """Raised when the history file cannot be opened."""


def _number(value: float) -> Any:
    return int(value) if float(value).is_integer() else value


@dataclass
class HistoryEntry:
    """One row of the maturity-history file."""

    scanned_at: str
    level: Level
    status_counts: dict[Status, int]
    repo: str = ""
    tool_version: str = ""
    signal_set_version: str = ""
    level_name: str = ""
    level_scores: dict[Level, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """The JSON object for this entry; empty optional fields are left out."""
        out: dict[str, Any] = {"scanned_at": self.scanned_at}
        for key in ("repo", "tool_version", "signal_set_version"):
            value = getattr(self, key)
            if value:
                out[key] = value
        out["level"] = int(self.level)
        if self.level_name:
            out["level_name"] = self.level_name
        if self.level_scores:
            out["level_scores"] = {
                str(int(lvl)): _number(score)
                for lvl, score in sorted(
                    self.level_scores.items(), key=lambda kv: str(int(kv[0]))
                )
            }
        out["status_counts"] = {
            str(status): count
            for status, count in sorted(
                self.status_counts.items(), key=lambda kv: str(kv[0])
            )
        }
        return out


def summarize_report(report: Report) -> HistoryEntry:
    """Collapse a full report into a history entry."""
    counts = {status: 0 for status in (Status.FOUND, Status.PARTIAL, Status.MISSING, Status.NA)}
    for signal in report.signals:
        status = Status(signal.status)
        counts[status] = counts.get(status, 0) + 1
    return HistoryEntry(
        scanned_at=report.scanned_at,
        repo=report.repo,
        tool_version=report.tool_version,
        signal_set_version=report.signal_set_version,
        level=report.verdict.level,
        level_name=report.verdict.name,
        level_scores=dict(report.verdict.level_scores),
        status_counts=counts,
    )


def write_history_line(stream: TextIO, entry: HistoryEntry) -> None:
    """Write ``entry`` to ``stream`` as one JSON line."""
    line = json.dumps(entry.to_dict(), separators=(",", ":"), ensure_ascii=False)
    stream.write(line + "\n")


def append_history(path: str | os.PathLike[str], entry: HistoryEntry) -> None:
    """Append ``entry`` to the file at ``path``, creating the file if needed.

    Parent directories are not created; a failure to open the file
    raises :class:`HistoryError`.
    """
    try:
        fh = open(path, "a", encoding="utf-8")
    except OSError as exc:
        raise HistoryError(f"open history file: {exc}") from exc
    with fh:
        write_history_line(fh, entry)