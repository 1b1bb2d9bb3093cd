"""Level 2 (Instructed) signals: preferences encoded in instruction files."""

from __future__ import annotations

from plumbline.model import (
    SCORE_FOUND,
    SCORE_INCOMPLETE,
    SCORE_MISSING,
    SCORE_STUBBED,
    Confidence,
    Evidence,
    Level,
    Method,
    Result,
    Status,
    status_from_score,
)
from plumbline.registry import Signal
from plumbline.scanner import RepoIndex

AGENT_INSTRUCTIONS_PATHS = (
    "CLAUDE.md",
    "AGENTS.md",
    ".github/copilot-instructions.md",
    ".cursorrules",
    ".windsurfrules",
)
"""Recognized agent-instructions files, in priority order."""

AGENT_INSTRUCTIONS_LINE_THRESHOLD = 20

COMMIT_RULES_PATHS = (
    ".gitmessage",
    ".github/commit-convention.md",
    "docs/commit-convention.md",
    "COMMIT_CONVENTION.md",
)
_COMMIT_RULES_PREFIXES = (".commitlintrc", "commitlint.config.")

CONTRIBUTOR_GUIDE_PATHS = (
    "CONTRIBUTING.md",
    ".github/CONTRIBUTING.md",
    ".github/CARD_DEVELOPMENT_GUIDE.md",
    "docs/CONTRIBUTING.md",
)
CONTRIBUTOR_GUIDE_LINE_THRESHOLD = 20

PR_TEMPLATE_PATHS = (
    ".github/pull_request_template.md",
    ".github/PULL_REQUEST_TEMPLATE.md",
    "PULL_REQUEST_TEMPLATE.md",
    "docs/pull_request_template.md",
)
_PR_TEMPLATE_DIRS = (".github/PULL_REQUEST_TEMPLATE/", "PULL_REQUEST_TEMPLATE/")
PR_TEMPLATE_MIN_CHECKBOXES = 3
_PR_TEMPLATE_SOME_CHECKBOXES = 1

_EXCERPT_LIMIT = 160
_CHECKBOX_PREFIXES = (b"- [ ]", b"- [x]", b"- [X]")


def contains_heading(data: bytes) -> bool:
    """True if any line starts (after indentation) with an ATX heading ``#``."""
    return any(line.lstrip(b" \t").startswith(b"#") for line in data.split(b"\n"))


def count_non_blank_lines(data: bytes) -> int:
    """Number of lines holding at least one non-whitespace character."""
    return sum(1 for line in data.split(b"\n") if line.strip())


def count_markdown_checkboxes(data: bytes) -> int:
    """Number of lines starting with a markdown checkbox, ticked or not."""
    return sum(
        1
        for line in data.split(b"\n")
        if line.lstrip(b" \t").startswith(_CHECKBOX_PREFIXES)
    )


def excerpt(data: bytes, limit: int) -> str:
    """The first ``limit`` bytes of ``data``, with an ellipsis if cut short."""
    if len(data) <= limit:
        return data.decode("utf-8", errors="replace")
    return data[:limit].decode("utf-8", errors="replace") + "…"


def _try_read(index: RepoIndex, path: str) -> bytes | None:
    try:
        return index.read(path)
    except (OSError, ValueError):
        return None


def _first_existing(index: RepoIndex, paths) -> tuple[str, bytes] | None:
    for path in paths:
        data = _try_read(index, path)
        if data is not None:
            return path, data
    return None


def _heading_body_score(has_heading: bool, has_body: bool) -> float:
    if has_heading and has_body:
        return SCORE_FOUND
    if has_heading or has_body:
        return SCORE_INCOMPLETE
    return SCORE_STUBBED


class AgentInstructions(Signal):
    """Any one recognized AI agent-instructions file with substantive content."""

    id = "l2.agent-instructions"
    level = Level.INSTRUCTED
    family = "instructions"
    title = "Agent instructions present (CLAUDE.md / AGENTS.md / copilot-instructions / etc.)"

    def detect(self, index: RepoIndex) -> Result:
        found = _first_existing(index, AGENT_INSTRUCTIONS_PATHS)
        if found is not None:
            return _score_agent_file(*found)
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.HIGH,
            method=Method.FILENAME_MATCH,
            notes=[
                "no agent-instructions file found at any known path: "
                + ", ".join(AGENT_INSTRUCTIONS_PATHS)
            ],
            fix_hint=(
                "Add ONE agent-instructions file at the repo root with a "
                "heading and ~20 lines covering this project's conventions, "
                "architecture, and the kinds of changes you want AI agents to "
                "avoid. Most common: CLAUDE.md (Claude Code) or AGENTS.md "
                "(multi-agent convention). copilot-instructions.md, "
                ".cursorrules, and .windsurfrules also work — pick whichever "
                "matches your team's tooling."
            ),
        )


def _score_agent_file(path: str, data: bytes) -> Result:
    has_heading = contains_heading(data)
    non_blank = count_non_blank_lines(data)
    has_body = non_blank >= AGENT_INSTRUCTIONS_LINE_THRESHOLD
    score = _heading_body_score(has_heading, has_body)
    threshold = AGENT_INSTRUCTIONS_LINE_THRESHOLD

    result = Result(
        status=status_from_score(score),
        score=score,
        confidence=Confidence.MEDIUM,
        method=Method.CONTENT_REGEX,
        evidence=[Evidence(path=path, excerpt=excerpt(data, _EXCERPT_LIMIT))],
    )
    if score == SCORE_FOUND:
        result.notes = [
            f"{path} has a heading and {non_blank} non-blank lines (≥{threshold})"
        ]
        return result

    if not has_heading:
        result.notes.append(
            f"{path} has no markdown heading (a line starting with '#')"
        )
    if not has_body:
        result.notes.append(
            f"{path} has only {non_blank} non-blank lines (need ≥{threshold} for Found)"
        )
    if not has_heading and not has_body:
        result.fix_hint = (
            f"Add a heading (e.g. '# {path}') and expand the file with ~20 lines "
            "of project conventions, architecture, and anti-patterns."
        )
    elif not has_heading:
        result.fix_hint = f"Add a top-level markdown heading at the start of {path}."
    else:
        result.fix_hint = (
            f"Expand {path} from {non_blank} to ≥{threshold} non-blank lines "
            "covering conventions, architecture, common pitfalls, and what AI "
            "agents should *not* do."
        )
    return result


class CommitRules(Signal):
    """Commit-message conventions as a guide or commitlint config."""

    id = "l2.commit-rules"
    level = Level.INSTRUCTED
    family = "templates"
    title = "Commit-message conventions encoded in repo"

    def detect(self, index: RepoIndex) -> Result:
        found = _first_existing(index, COMMIT_RULES_PATHS)
        path = found[0] if found is not None else None
        if path is None:
            path = next(
                (
                    paths[0]
                    for base, paths in index.by_name.items()
                    if base.startswith(_COMMIT_RULES_PREFIXES)
                ),
                None,
            )
        if path is not None:
            return Result(
                status=Status.FOUND,
                score=SCORE_FOUND,
                confidence=Confidence.HIGH,
                method=Method.FILENAME_MATCH,
                evidence=[Evidence(path=path)],
            )
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.HIGH,
            method=Method.FILENAME_MATCH,
            notes=["no .gitmessage, commitlint config, or commit-convention.md found"],
            fix_hint=(
                "Pick one: (a) commit a .gitmessage template (and 'git config "
                "commit.template .gitmessage'), (b) add a commitlint.config.js "
                "with @commitlint/config-conventional, or (c) write a brief "
                ".github/commit-convention.md describing your prefix vocabulary "
                "(feat:, fix:, etc.)."
            ),
        )


class ContributorGuide(Signal):
    """A substantive contributor or development guide."""

    id = "l2.contributor-guide"
    level = Level.INSTRUCTED
    family = "instructions"
    title = "Contributor / development guide present and substantive"

    def detect(self, index: RepoIndex) -> Result:
        found = _first_existing(index, CONTRIBUTOR_GUIDE_PATHS)
        if found is not None:
            path, data = found
            score = _heading_body_score(
                contains_heading(data),
                count_non_blank_lines(data) >= CONTRIBUTOR_GUIDE_LINE_THRESHOLD,
            )
            return Result(
                status=status_from_score(score),
                score=score,
                confidence=Confidence.MEDIUM,
                method=Method.CONTENT_REGEX,
                evidence=[Evidence(path=path, excerpt=excerpt(data, _EXCERPT_LIMIT))],
            )
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.HIGH,
            method=Method.FILENAME_MATCH,
            notes=["no CONTRIBUTING.md or equivalent contributor guide at known paths"],
            fix_hint=(
                "Add CONTRIBUTING.md (or .github/CONTRIBUTING.md) covering "
                "how PRs are reviewed, what counts as a 'good' change, and the "
                "common rejection reasons. Aim for ≥20 substantive lines under "
                "at least one heading."
            ),
        )


class PRTemplate(Signal):
    """A pull-request template with a structured checklist."""

    id = "l2.pr-template"
    level = Level.INSTRUCTED
    family = "templates"
    title = "PR template with structured checklist"

    def detect(self, index: RepoIndex) -> Result:
        found = _first_existing(index, PR_TEMPLATE_PATHS)
        if found is not None:
            return _score_pr_template(*found)
        for paths in index.by_name.values():
            for path in paths:
                if not path.startswith(_PR_TEMPLATE_DIRS):
                    continue
                data = _try_read(index, path)
                if data is not None:
                    return _score_pr_template(path, data)
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.HIGH,
            method=Method.FILENAME_MATCH,
            notes=[
                "no PR template found at .github/pull_request_template.md "
                "or PULL_REQUEST_TEMPLATE/"
            ],
            fix_hint=(
                "Add .github/pull_request_template.md with at least 3 markdown "
                "checkboxes ('- [ ] item') so AI agents fill in a structured "
                "checklist on every PR."
            ),
        )


def _score_pr_template(path: str, data: bytes) -> Result:
    checkboxes = count_markdown_checkboxes(data)
    minimum = PR_TEMPLATE_MIN_CHECKBOXES
    if checkboxes >= minimum:
        score = SCORE_FOUND
    elif checkboxes >= _PR_TEMPLATE_SOME_CHECKBOXES:
        score = SCORE_INCOMPLETE
    else:
        score = SCORE_STUBBED
    result = Result(
        status=status_from_score(score),
        score=score,
        confidence=Confidence.MEDIUM,
        method=Method.CONTENT_REGEX,
        evidence=[Evidence(path=path, excerpt=excerpt(data, _EXCERPT_LIMIT))],
    )
    if score == SCORE_FOUND:
        result.notes = [f"{checkboxes} markdown checkboxes (≥{minimum})"]
    elif score == SCORE_INCOMPLETE:
        result.notes = [
            f"only {checkboxes} markdown checkboxes (need ≥{minimum} for Found)"
        ]
        result.fix_hint = (
            f"Add {minimum - checkboxes} more markdown checkbox(es) to the PR "
            "template covering pre-merge checks (tests, docs, version bumps, etc.)."
        )
    else:
        result.notes = ["PR template exists but has no markdown checkboxes"]
        result.fix_hint = (
            "Add at least 3 markdown checkboxes ('- [ ] tests added', etc.) to "
            "make the template actionable for AI agents."
        )
    return result