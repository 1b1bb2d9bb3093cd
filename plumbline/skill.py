"""Usage guides for coding-agent tools and the plans that install them.

A :class:`Target` is one place plumbline can install its guide: a tool,
the file path it reads, and the file body. All bodies share the same
guide text and differ only in their frontmatter or preamble.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from plumbline.model import FixOp, FixOpKind, FixPlan


@dataclass(frozen=True)
class Target:
    """One install location for the plumbline usage guide."""

    id: str
    """Stable CLI-visible identifier, e.g. ``"claude"``."""
    name: str
    """Human-readable tool name."""
    path: str
    """Repo-relative install location for project-scope installs."""
    global_path: str = ""
    """Install location relative to the home directory; empty if none."""
    shared_file: bool = False
    """True when the file may already be used for other purposes."""
    body: str = field(default="", repr=False)
    """The full file body written when creating the file."""

    def supports_global(self) -> bool:
        """Whether this target has a documented user-scope location."""
        return bool(self.global_path)


_CORE_GUIDE = """# Working with plumbline

plumbline inspects a repository and rates how ready it is for AI-assisted
development on the ACMM scale (levels 1 to 5). Every check is a plain file
or workflow inspection: nothing is sent over the network and no model is
consulted, so the same repository always gets the same answer.

## Use it when

- someone wants to know how mature the repo is for AI coding work;
- someone is deciding whether to add an agent instruction file such as
  CLAUDE.md, AGENTS.md, copilot-instructions, .cursorrules or .windsurfrules;
- the PR template, contributor guide or commit conventions need attention;
- someone asks what to improve next for AI-driven workflows;
- a plumbline gate in CI fails and the cause is unclear.

## Typical session

1. Ask for the verdict as JSON:

       plumbline --json

   Read `verdict.level`, the per-level averages in `verdict.level_scores`,
   and `verdict.next_gap`, which lists the signals one level up that are
   not yet satisfied.

2. Look closer at each gap signal:

       plumbline inspect <signal-id> --json

   The result carries `status`, `score`, `confidence`, the `evidence`
   that was found, explanatory `notes` and a `fix_hint`.

3. Preview a fix, then apply it only once the user agrees:

       plumbline fix <signal-id>
       plumbline fix <signal-id> --apply

   Pass answers with `--input KEY=VALUE` (repeatable). Existing files are
   never replaced; plumbline appends a marked block to them instead.

4. Browse what plumbline knows about:

       plumbline signals --json
       plumbline schema verdict
       plumbline schema signal-result

## What stays stable

- Signal IDs do not change between patch releases.
  - Level 2: `l2.agent-instructions`, `l2.contributor-guide`,
    `l2.pr-template`, `l2.commit-rules`.
  - Level 3: build-lint-gate, coverage-gate, coverage-suite,
    nightly-compliance, flaky-analysis, error-monitoring, user-feedback,
    acceptance-tracking.
  - Level 4: self-modifying-config, auto-triage, threshold-block,
    worktree-agents, error-recovery.
  - Level 5: issue-to-pr, self-improvement, docs-from-prs,
    multi-repo-orchestration.
- `plumbline schema <name>` prints JSON Schemas for the verdict, a signal
  result, an event and the config.
- Exit status: 0 success, 1 below `--fail-below`, 2 unable to run,
  3 bad configuration.
- Nothing is written unless `--apply` is given to `plumbline fix` or
  `plumbline install-skill`.

## Advice for agents

- The five agent instruction files count as a single signal,
  `l2.agent-instructions`. One of them is enough; do not recommend all.
- Partial credit uses exactly four steps: 0.0, 0.33, 0.67 and 1.0.
  There is no 0.5.
- For a strict CI gate that ignores filename-only matches, use
  `--min-confidence high`.
- Workflow-based signals (level 3 and up) currently read GitHub Actions
  files only; `--ci-system` is reserved for other CI systems.

## Do not use it for

- reviewing code in general;
- measuring test coverage (it only checks whether a coverage gate exists);
- linting or static analysis of application code;
- anything that needs the project built or its tests run.

## Further reading

- `SPEC.md`, shipped with plumbline, defines the model in full.
- `plumbline help <topic>` covers levels, signals, scoring, output,
  config, ci, agents, profiles, compatibility and fix.
"""

_CLAUDE_BODY = (
    """---
name: plumbline
description: Assess this repository's AI Codebase Maturity Model (ACMM) level with plumbline and apply its scaffolded fixes. Use when the user asks about AI coding readiness, agent instruction files (CLAUDE.md, AGENTS.md, copilot-instructions, .cursorrules, .windsurfrules), CI quality gates, contributor guides, PR templates, commit conventions, or what to add next to make the repo better suited to AI-driven development.
---

"""
    + _CORE_GUIDE
)

_CURSOR_BODY = (
    """---
description: Guidance for using plumbline, an ACMM readiness assessor, in this repository.
globs:
  - "**/*"
alwaysApply: false
---

"""
    + _CORE_GUIDE
)

_GEMINI_BODY = (
    """<!-- Read by Gemini Code Assist (CLI and IDE extensions).
Installed by plumbline. -->

"""
    + _CORE_GUIDE
)

_AGENTS_BODY = (
    """<!-- Read by OpenAI Codex CLI, OpenCode and other tools that follow the
AGENTS.md convention. Installed by plumbline for the selected tool. -->

"""
    + _CORE_GUIDE
)

_WINDSURF_BODY = (
    """<!-- Single-file agent rules for Windsurf or Cline.
Installed by plumbline. -->

"""
    + _CORE_GUIDE
)

_COPILOT_BODY = (
    """<!-- Project instructions for GitHub Copilot.
Installed by plumbline. -->

"""
    + _CORE_GUIDE
)

PATH = ".claude/skills/plumbline/SKILL.md"
"""The canonical Claude Code skill path."""

BODY = _CLAUDE_BODY
"""The canonical Claude Code skill body."""

# Display order: dedicated skill-directory tools first, then shared files.
_TARGETS: tuple[Target, ...] = (
    Target("claude", "Claude Code", PATH, PATH, body=_CLAUDE_BODY),
    Target(
        "cursor",
        "Cursor",
        ".cursor/rules/plumbline.mdc",
        ".cursor/rules/plumbline.mdc",
        body=_CURSOR_BODY,
    ),
    Target(
        "gemini",
        "Gemini Code Assist",
        "GEMINI.md",
        ".gemini/GEMINI.md",
        shared_file=True,
        body=_GEMINI_BODY,
    ),
    Target(
        "codex",
        "OpenAI Codex CLI",
        "AGENTS.md",
        ".codex/AGENTS.md",
        shared_file=True,
        body=_AGENTS_BODY,
    ),
    Target(
        "opencode",
        "OpenCode",
        "AGENTS.md",
        ".config/opencode/AGENTS.md",
        shared_file=True,
        body=_AGENTS_BODY,
    ),
    Target("windsurf", "Windsurf", ".windsurfrules", shared_file=True, body=_WINDSURF_BODY),
    Target("cline", "Cline", ".clinerules", shared_file=True, body=_WINDSURF_BODY),
    Target(
        "copilot",
        "GitHub Copilot",
        ".github/copilot-instructions.md",
        shared_file=True,
        body=_COPILOT_BODY,
    ),
)


def targets() -> list[Target]:
    """All known install targets, in display order."""
    return list(_TARGETS)


def target_by_id(target_id: str) -> Target | None:
    """The target with ``target_id``, or None."""
    return next((t for t in _TARGETS if t.id == target_id), None)


def ids() -> list[str]:
    """Every target ID, in display order."""
    return [t.id for t in _TARGETS]


def new_plan_for(target_id: str) -> FixPlan:
    """The install plan for ``target_id`` at project scope.

    Raises ``ValueError`` for an unknown target.
    """
    return _plan_for(target_id, global_scope=False)


def new_plan_for_global(target_id: str) -> FixPlan:
    """The install plan for ``target_id`` at user scope.

    The operation's path is relative to the user's home directory; the
    caller resolves it. Raises ``ValueError`` for an unknown target or
    one without a documented global location.
    """
    return _plan_for(target_id, global_scope=True)


def new_plan() -> FixPlan:
    """The canonical Claude Code install plan."""
    return new_plan_for("claude")


def _plan_for(target_id: str, global_scope: bool) -> FixPlan:
    target = target_by_id(target_id)
    if target is None:
        raise ValueError(
            f"unknown install target {target_id!r} (available: {', '.join(ids())})"
        )
    path = target.path
    scope = f"at {target.path} (in repo)"
    if global_scope:
        if not target.supports_global():
            capable = ", ".join(t.id for t in _TARGETS if t.supports_global())
            raise ValueError(
                f"target {target_id!r} has no documented global location; install "
                f"at project scope (drop --global) or use one of: {capable}"
            )
        path = target.global_path
        scope = f"at ~/{target.global_path} (user-scope)"
    return FixPlan(
        signal_id=f"install-skill:{target.id}",
        summary=f"Install plumbline guidance for {target.name} {scope}",
        ops=[
            FixOp(
                kind=FixOpKind.CREATE_FILE,
                path=path,
                body=target.body.encode("utf-8"),
            )
        ],
    )