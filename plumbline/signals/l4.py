"""Level 4 (Adaptive) signals that work from repository files."""

from __future__ import annotations

import re

from plumbline.model import (
    SCORE_FOUND,
    SCORE_MISSING,
    Confidence,
    Evidence,
    Level,
    Method,
    Result,
    Status,
)
from plumbline.registry import Signal
from plumbline.scanner import RepoIndex

_WORKTREE_MARKER_PATHS = (
    ".devcontainer/devcontainer.json",
    ".claude/settings.json",
    ".claude/agents",
)
_WORKTREE_RE = re.compile(rb"(?i)git\s+worktree")
_SEARCHED_PREFIXES = (".github/", "scripts/")


def _readable(index: RepoIndex, path: str) -> bytes | None:
    try:
        return index.read(path)
    except (OSError, ValueError):
        return None


class WorktreeAgents(Signal):
    """Configuration for running several AI agents concurrently."""

    id = "l4.worktree-agents"
    level = Level.ADAPTIVE
    family = "automation"
    title = "Concurrent AI agent runner / devcontainer / worktree config"

    def detect(self, index: RepoIndex) -> Result:
        for path in _WORKTREE_MARKER_PATHS:
            if _readable(index, path) is not None:
                return Result(
                    status=Status.FOUND,
                    score=SCORE_FOUND,
                    confidence=Confidence.MEDIUM,
                    method=Method.FILENAME_MATCH,
                    evidence=[Evidence(path=path)],
                )
        for entry in index.files:
            if not entry.path.startswith(_SEARCHED_PREFIXES):
                continue
            data = _readable(index, entry.path)
            if data is not None and _WORKTREE_RE.search(data):
                return Result(
                    status=Status.FOUND,
                    score=SCORE_FOUND,
                    confidence=Confidence.LOW,
                    method=Method.CONTENT_REGEX,
                    evidence=[Evidence(path=entry.path)],
                )
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.LOW,
            method=Method.FILENAME_MATCH,
            notes=["no .devcontainer / .claude config / git-worktree scripts found"],
            fix_hint=(
                "Set up infrastructure for concurrent AI agent runs: a .devcontainer/ "
                "for reproducible environments, or a script under scripts/ that "
                "spawns isolated git worktrees so multiple agents can work in "
                "parallel without stepping on each other."
            ),
        )