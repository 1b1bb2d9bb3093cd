"""Roll per-signal results into a maturity verdict."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from plumbline.model import (
    SCORE_FOUND,
    Confidence,
    Level,
    SignalResult,
    Status,
    Verdict,
)

DEFAULT_PASS_THRESHOLD = 0.7

_SCORED_LEVELS = (
    Level.INSTRUCTED,
    Level.MEASURED,
    Level.ADAPTIVE,
    Level.SELF_SUSTAINING,
)


@dataclass
class Options:
    """Tuning for one :func:`compute` call; zero values mean defaults."""

    pass_threshold: float = 0.0
    min_confidence: Confidence | None = None


def compute(
    results: Iterable[SignalResult] | None, options: Options | None = None
) -> Verdict:
    """Compute the verdict: per-level averages, no level skipping."""
    options = options or Options()
    threshold = options.pass_threshold or DEFAULT_PASS_THRESHOLD
    min_conf = Confidence(options.min_confidence or Confidence.LOW)

    by_level: dict[Level, list[SignalResult]] = defaultdict(list)
    for r in results or ():
        by_level[r.level].append(r)

    scores = {lvl: _level_score(by_level[lvl], min_conf) for lvl in _SCORED_LEVELS}

    verdict_level = Level.ASSISTED
    for lvl in _SCORED_LEVELS:
        if scores[lvl] < threshold:
            break
        verdict_level = lvl

    return Verdict(
        level=verdict_level,
        name=verdict_level.display_name(),
        level_scores=scores,
        next_gap=_next_gap(by_level, verdict_level),
        min_confidence_applied=min_conf,
    )


def _level_score(results: list[SignalResult], min_conf: Confidence) -> float:
    counted = [
        _gate_adjusted_score(r, min_conf) for r in results if r.status != Status.NA
    ]
    if not counted:
        return 0.0
    return sum(counted) / len(counted)


def _gate_adjusted_score(r: SignalResult, min_conf: Confidence) -> float:
    # The maximum score is honoured whatever the confidence.
    if r.score >= SCORE_FOUND:
        return r.score
    if not Confidence(r.confidence).at_least(min_conf):
        return 0.0
    return r.score


def _next_gap(by_level: dict[Level, list[SignalResult]], verdict: Level) -> list[str]:
    if verdict >= Level.SELF_SUSTAINING:
        return []
    target = Level(verdict + 1)
    return sorted(r.id for r in by_level.get(target, []) if r.score < SCORE_FOUND)