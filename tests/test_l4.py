from pathlib import Path

from plumbline.model import SCORE_FOUND, SCORE_MISSING, Confidence, Level, Method, Status
from plumbline.scanner import scan
from plumbline.signals.l4 import WorktreeAgents


def run_on(signal, root: Path, files: dict[str, str]):
    for rel, text in files.items():
        target = root.joinpath(*rel.split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text)
    return signal.detect(scan(root))


def test_devcontainer_found(tmp_path):
    got = run_on(WorktreeAgents(), tmp_path, {".devcontainer/devcontainer.json": "{}"})
    assert got.score == SCORE_FOUND
    assert got.confidence == Confidence.MEDIUM
    assert got.evidence[0].path == ".devcontainer/devcontainer.json"


def test_claude_settings_found(tmp_path):
    got = run_on(WorktreeAgents(), tmp_path, {".claude/settings.json": "{}"})
    assert got.score == SCORE_FOUND
    assert got.evidence[0].path == ".claude/settings.json"


def test_worktree_script_found_with_low_confidence(tmp_path):
    got = run_on(
        WorktreeAgents(),
        tmp_path,
        {"scripts/spawn.sh": "#!/bin/sh\ngit worktree add ../agent-1 main\n"},
    )
    assert got.score == SCORE_FOUND
    assert got.confidence == Confidence.LOW
    assert got.method == Method.CONTENT_REGEX
    assert got.evidence[0].path == "scripts/spawn.sh"


def test_worktree_mention_outside_searched_dirs_ignored(tmp_path):
    got = run_on(WorktreeAgents(), tmp_path, {"docs/notes.md": "use git worktree add"})
    assert got.score == SCORE_MISSING


def test_missing(tmp_path):
    got = run_on(WorktreeAgents(), tmp_path, {"README.md": "# r"})
    assert got.score == SCORE_MISSING
    assert "worktree" in got.fix_hint


def test_identity_on_empty_repo(tmp_path):
    signal = WorktreeAgents()
    result = signal.detect(scan(tmp_path))
    assert (signal.id, signal.level, signal.family) == (
        "l4.worktree-agents",
        Level.ADAPTIVE,
        "automation",
    )
    assert result.status == Status.MISSING