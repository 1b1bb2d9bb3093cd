"""The Signal contract and the registry that holds detectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from plumbline.model import FixInput, FixPlan, Level, Result

if TYPE_CHECKING:
    from plumbline.scanner import RepoIndex


class Signal(ABC):
    """A single maturity detector.

    Subclasses provide ``id``, ``level``, ``family`` and ``title`` and
    implement :meth:`detect`.
    """

    id: str
    level: Level
    family: str
    title: str

    @abstractmethod
    def detect(self, index: RepoIndex) -> Result:
        """Inspect the repository index and report a result."""


class Fixer(Signal):
    """A signal that can also scaffold or extend its target artifact."""

    @abstractmethod
    def inputs(self) -> list[FixInput]:
        """The user-supplied values :meth:`plan` needs."""

    @abstractmethod
    def plan(self, index: RepoIndex, inputs: dict[str, str]) -> FixPlan:
        """Compute the fix operations; must not touch the file system."""


class Registry:
    """A set of signals keyed by ID."""

    def __init__(self) -> None:
        self._by_id: dict[str, Signal] = {}

    def register(self, signal: Signal) -> None:
        """Add ``signal``; a duplicate ID is a programming error."""
        if signal.id in self._by_id:
            raise ValueError(f"signals: duplicate registration for {signal.id!r}")
        self._by_id[signal.id] = signal

    def get(self, signal_id: str) -> Signal | None:
        """The signal with ``signal_id``, or None."""
        return self._by_id.get(signal_id)

    def all(self) -> list[Signal]:
        """Every signal, ordered by (level, id)."""
        return _sorted(self._by_id.values())

    def at_level(self, level: Level) -> list[Signal]:
        """Signals at ``level``, ordered by id."""
        return _sorted(s for s in self._by_id.values() if s.level == level)

    def in_family(self, family: str) -> list[Signal]:
        """Signals in ``family``, ordered by (level, id)."""
        return _sorted(s for s in self._by_id.values() if s.family == family)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, signal_id: object) -> bool:
        return signal_id in self._by_id


def _sorted(signals) -> list[Signal]:
    return sorted(signals, key=lambda s: (int(s.level), s.id))