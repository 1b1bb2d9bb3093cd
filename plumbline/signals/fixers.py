"""Fixers for the Level 2 signals.

Each fixer is also its signal. When the target file is missing it is
scaffolded. When it exists, a marked block is appended. Existing prose
is never overwritten, and computing a plan touches no files.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from plumbline.model import FixInput, FixInputKind, FixOp, FixOpKind, FixPlan
from plumbline.registry import Fixer
from plumbline.scanner import RepoIndex
from plumbline.signals.l2 import (
    AGENT_INSTRUCTIONS_PATHS,
    CONTRIBUTOR_GUIDE_PATHS,
    PR_TEMPLATE_PATHS,
    AgentInstructions,
    CommitRules,
    ContributorGuide,
    PRTemplate,
)

_DEFAULT_AGENT_FILE = "CLAUDE.md"
_SUMMARY_DEFAULT = "TODO: replace this with a one-paragraph project summary."
_CONVENTIONS_DEFAULT = "TODO: list the conventions an AI agent should follow."
_ANTIPATTERNS_DEFAULT = "TODO: list the things AI agents should never do."
_CRITERIA_DEFAULT = "TODO: list common rejection reasons."


def _exists(index: RepoIndex, path: str) -> bool:
    try:
        index.read(path)
    except (OSError, ValueError):
        return False
    return True


def _first_existing(index: RepoIndex, paths: Iterable[str]) -> str | None:
    return next((p for p in paths if _exists(index, p)), None)


def _get_or(inputs: Mapping[str, str] | None, key: str, fallback: str) -> str:
    value = (inputs or {}).get(key)
    if value is None or not value.strip():
        return fallback
    return value


def _single_op(signal_id: str, summary: str, kind: FixOpKind, path: str, body: str) -> FixPlan:
    return FixPlan(
        signal_id=signal_id,
        summary=summary,
        ops=[FixOp(kind=kind, path=path, body=body.encode("utf-8"))],
    )


class AgentInstructionsFixer(AgentInstructions, Fixer):
    """Scaffolds or extends an agent-instructions file."""

    def inputs(self) -> list[FixInput]:
        return [
            FixInput(
                key="filename",
                label="Which agent-instructions file should plumbline create / update?",
                help=(
                    "Default is CLAUDE.md (most common). Other valid choices: "
                    "AGENTS.md, .github/copilot-instructions.md, .cursorrules, "
                    ".windsurfrules. Pick whichever matches your team's tooling."
                ),
                kind=FixInputKind.TEXT,
                required=False,
                default=_DEFAULT_AGENT_FILE,
            ),
            FixInput(
                key="project_summary",
                label=(
                    "One-paragraph summary of this project "
                    "(audience: an AI agent that just walked in)"
                ),
                help="What does this project do? Who uses it? What's the tech stack?",
                kind=FixInputKind.MULTILINE,
                required=False,
                default=_SUMMARY_DEFAULT,
            ),
            FixInput(
                key="conventions",
                label="Top 3-5 conventions you want AI agents to follow",
                help=(
                    "e.g., 'use sql/template, never raw fmt.Sprintf for queries'; "
                    "'prefer composition over inheritance'."
                ),
                kind=FixInputKind.MULTILINE,
                required=False,
                default=_CONVENTIONS_DEFAULT,
            ),
            FixInput(
                key="antipatterns",
                label="Top 3-5 things AI agents should NOT do",
                help=(
                    "Past frustrations are gold here. e.g., 'don't add new "
                    "packages without checking go.sum first'."
                ),
                kind=FixInputKind.MULTILINE,
                required=False,
                default=_ANTIPATTERNS_DEFAULT,
            ),
        ]

    def plan(self, index: RepoIndex, inputs: Mapping[str, str] | None) -> FixPlan:
        # Extend an existing agent file rather than creating a competing one.
        existing = _first_existing(index, AGENT_INSTRUCTIONS_PATHS)
        if existing is not None:
            return _single_op(
                self.id,
                f"Append a guidance expansion block to {existing} (existing content untouched)",
                FixOpKind.APPEND_FILE,
                existing,
                _agent_append_body(existing, inputs),
            )

        target = (inputs or {}).get("filename", "").strip() or _DEFAULT_AGENT_FILE
        if target not in AGENT_INSTRUCTIONS_PATHS:
            raise ValueError(
                f"filename {target!r} is not a recognized agent-instructions path; "
                "valid: CLAUDE.md, AGENTS.md, .github/copilot-instructions.md, "
                ".cursorrules, .windsurfrules"
            )
        return _single_op(
            self.id,
            f"Create {target} with a structured AI guidance template",
            FixOpKind.CREATE_FILE,
            target,
            _agent_create_body(target, inputs),
        )


def _agent_create_body(filename: str, inputs: Mapping[str, str] | None) -> str:
    summary = _get_or(inputs, "project_summary", _SUMMARY_DEFAULT)
    conventions = _get_or(inputs, "conventions", _CONVENTIONS_DEFAULT)
    antipatterns = _get_or(inputs, "antipatterns", _ANTIPATTERNS_DEFAULT)
    return f"""# {filename}

This file provides guidance to AI coding agents working in this repository.

## Project summary

{summary}

## Conventions

{conventions}

## Anti-patterns (do NOT)

{antipatterns}

## Workflow

- Run the test suite before suggesting code is ready to merge.
- Match the formatting and structure of existing code.
- When unsure, ask before introducing new dependencies.

## Where to look

- Source: ./
- Tests: alongside source files (*_test.go) or under tests/.
- Docs: README.md, docs/.
"""


def _agent_append_body(path: str, inputs: Mapping[str, str] | None) -> str:
    conventions = _get_or(
        inputs, "conventions", "TODO: add the conventions an AI agent should follow."
    )
    antipatterns = _get_or(
        inputs, "antipatterns", "TODO: add the things AI agents should never do."
    )
    return f"""<!-- plumbline: appended block; expand {path} to reach the L2 substantive bar -->

## Additional conventions

{conventions}

## Additional anti-patterns (do NOT)

{antipatterns}
"""


class ContributorGuideFixer(ContributorGuide, Fixer):
    """Scaffolds or extends the contributor guide."""

    def inputs(self) -> list[FixInput]:
        return [
            FixInput(
                key="review_criteria",
                label="What gets a PR rejected?",
                help=(
                    "The most common reasons a PR doesn't merge. AI agents will "
                    "read this and avoid those mistakes."
                ),
                kind=FixInputKind.MULTILINE,
                required=False,
                default=_CRITERIA_DEFAULT,
            )
        ]

    def plan(self, index: RepoIndex, inputs: Mapping[str, str] | None) -> FixPlan:
        existing = _first_existing(index, CONTRIBUTOR_GUIDE_PATHS)
        criteria = _get_or(inputs, "review_criteria", _CRITERIA_DEFAULT)
        if existing is not None:
            return _single_op(
                self.id,
                f"Append additional criteria to {existing}",
                FixOpKind.APPEND_FILE,
                existing,
                "\n<!-- plumbline: appended block -->\n\n"
                "## Additional review criteria\n\n" + criteria + "\n",
            )
        target = "CONTRIBUTING.md"
        return _single_op(
            self.id,
            f"Create {target}",
            FixOpKind.CREATE_FILE,
            target,
            _contributing_body(criteria),
        )


def _contributing_body(criteria: str) -> str:
    return f"""# Contributing

Welcome. This guide is the canonical source for how PRs get reviewed
and merged in this repository — both for human contributors and for
AI coding agents.

## Workflow

1. Branch from main: `git checkout -b <type>/<short-name>`.
2. Make focused commits — one logical change per PR.
3. Run the full test suite locally before opening the PR.
4. Open a PR; the template lists the per-merge checks.

## What gets a PR rejected

{criteria}

## Style

- Format with the language's standard tool (gofmt, prettier, etc.).
- Don't reformat unrelated lines; keep diffs minimal.
- Comments explain WHY, not WHAT.

## Asking for help

Open a draft PR or an issue. Don't sit on a stuck branch.
"""


_PR_TEMPLATE_BODY = """## Summary

<!-- One paragraph: what changed and why. -->

## Test plan

- [ ] Unit tests cover the change
- [ ] Lint and type-check pass
- [ ] Manual smoke check (if UI / behavior changed)
- [ ] Docs updated (if a public surface changed)
- [ ] No unrelated formatting churn in the diff

## Risks / rollback

<!-- What could go wrong; how to revert if it does. -->
"""

_PR_TEMPLATE_APPEND = (
    "\n<!-- plumbline: appended block -->\n\n## Additional checks\n\n"
    "- [ ] Lint and type-check pass\n- [ ] Manual smoke check\n- [ ] Docs updated\n"
)


class PRTemplateFixer(PRTemplate, Fixer):
    """Scaffolds or extends the pull-request template."""

    def inputs(self) -> list[FixInput]:
        return []

    def plan(self, index: RepoIndex, inputs: Mapping[str, str] | None) -> FixPlan:
        existing = _first_existing(index, PR_TEMPLATE_PATHS)
        if existing is not None:
            return _single_op(
                self.id,
                f"Append checklist items to {existing}",
                FixOpKind.APPEND_FILE,
                existing,
                _PR_TEMPLATE_APPEND,
            )
        target = ".github/pull_request_template.md"
        return _single_op(
            self.id, f"Create {target}", FixOpKind.CREATE_FILE, target, _PR_TEMPLATE_BODY
        )


_GITMESSAGE_BODY = """# subject (≤72 chars): <type>(<scope>): <imperative summary>
#
# Body — wrap at 72 characters. Explain WHY this change is needed and
# WHAT the user-visible effect is. Skip the "what" if the diff is
# self-explanatory.
#
# <type>: feat | fix | docs | refactor | test | chore | perf | ci
#
# After saving, run:
#   git config commit.template .gitmessage
# (the per-repo .git/config is local, so each contributor opts in).
"""


class CommitRulesFixer(CommitRules, Fixer):
    """Scaffolds a conventional-commit ``.gitmessage`` template."""

    def inputs(self) -> list[FixInput]:
        return []

    def plan(self, index: RepoIndex, inputs: Mapping[str, str] | None) -> FixPlan:
        return _single_op(
            self.id,
            "Create .gitmessage with a conventional-commit template",
            FixOpKind.CREATE_FILE,
            ".gitmessage",
            _GITMESSAGE_BODY,
        )