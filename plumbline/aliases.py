"""Registry of deprecated signal IDs and their current names."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class Alias:
    """A deprecated-to-current signal-ID rename."""

    from_id: str
    to_id: str
    since: str
    reason: str


_MERGE_REASON = (
    "merged into l2.agent-instructions: any one of CLAUDE.md / AGENTS.md / "
    ".github/copilot-instructions.md / .cursorrules / .windsurfrules "
    "satisfies the signal"
)

_ALIASES: dict[str, Alias] = {
    a.from_id: a
    for a in (
        Alias("l2.claude-md", "l2.agent-instructions", "v2", _MERGE_REASON),
        Alias("l2.copilot-instructions", "l2.agent-instructions", "v2", _MERGE_REASON),
    )
}

_warned_lock = threading.Lock()
_warned: set[str] = set()


def resolve_id(signal_id: str) -> str:
    """Return the current ID for ``signal_id``; unaliased IDs pass through."""
    alias = _ALIASES.get(signal_id)
    return alias.to_id if alias else signal_id


def lookup_alias(signal_id: str) -> Alias | None:
    """Return the alias entry for a deprecated ID, or None."""
    return _ALIASES.get(signal_id)


def all_aliases() -> list[Alias]:
    """Every registered alias, ordered by deprecated ID."""
    return sorted(_ALIASES.values(), key=lambda a: a.from_id)


def resolve_ids(
    ids: list[str], stream: TextIO | None = None
) -> tuple[list[str], list[Alias]]:
    """Rewrite deprecated IDs, warning once per ID on ``stream``.

    Passing ``stream=None`` suppresses warnings. Returns the rewritten
    IDs and the aliases that fired, in input order.
    """
    resolved: list[str] = []
    fired: list[Alias] = []
    for signal_id in ids:
        alias = _ALIASES.get(signal_id)
        if alias is None:
            resolved.append(signal_id)
            continue
        resolved.append(alias.to_id)
        fired.append(alias)
        _warn_once(stream, alias)
    return resolved, fired


def reset_warnings() -> None:
    """Forget which deprecated IDs have already been warned about."""
    with _warned_lock:
        _warned.clear()


def _warn_once(stream: TextIO | None, alias: Alias) -> None:
    if stream is None:
        return
    with _warned_lock:
        if alias.from_id in _warned:
            return
        _warned.add(alias.from_id)
    stream.write(
        f'warning: signal "{alias.from_id}" is deprecated since signal-set '
        f'{alias.since}; using "{alias.to_id}" instead ({alias.reason})\n'
    )