# plumbline

plumbline is a library that looks at a source repository and reports how
ready it is for AI-driven development. It rates the repository on the AI
Codebase Maturity Model (ACMM), which has five levels: Assisted (1),
Instructed (2), Measured (3), Adaptive (4) and Self-Sustaining (5).

Detection is deterministic. It makes no network calls and no model calls.
It reads file names and metadata, and at most the first 64 KiB of each
file it opens.

## Scanning a repository

`plumbline.scanner.scan(root)` walks a directory and returns a `RepoIndex`:

- `files`: a list of `FileEntry` records with `path`, `size` and `mode`.
  Paths are repo-relative and use `/`.
- `by_name`: maps each base name to the paths that have it.
- `has_git`: true when a `.git` entry exists at the top level.

Directories named `.git`, `node_modules` or `vendor` are skipped at any
depth. `RepoIndex.read(path)` returns up to `READ_SAMPLE_SIZE` bytes of a
file and caches the result. It raises `FileNotFoundError` (or another
`OSError`) when the file cannot be read, and `ValueError` for a path that
is absolute or holds `..`.

## Signals

Each check is a *signal*: a subclass of `plumbline.registry.Signal` with an
`id`, `level`, `family`, `title` and a `detect(index)` method that returns
a `plumbline.model.Result`.

`plumbline.catalog.default_registry()` returns a fresh `Registry` holding:

| ID | Level | Family |
|----|-------|--------|
| `l2.agent-instructions` | 2 | instructions |
| `l2.contributor-guide` | 2 | instructions |
| `l2.pr-template` | 2 | templates |
| `l2.commit-rules` | 2 | templates |
| `l3.acceptance-tracking` | 3 | monitoring |
| `l3.error-monitoring` | 3 | monitoring |
| `l3.user-feedback` | 3 | feedback |
| `l4.worktree-agents` | 4 | automation |

A `Result` has these fields:

- `status`: `found`, `partial`, `missing` or `na`.
- `score`: always one of 0.0, 0.33, 0.67 or 1.0.
- `confidence`: `low`, `medium` or `high`.
- `method`: `filename-match`, `content-regex` or `ast`.
- `evidence`: the files the result is based on.
- `notes` and `fix_hint`: explanatory text.

`Registry` provides these methods:

- `register(signal)` raises `ValueError` on a duplicate ID.
- `get(signal_id)` returns the signal or `None`.
- `all()` returns every signal, ordered by level and then ID.
- `at_level(level)` and `in_family(family)` return the matching signals in
  the same order.

```python
from plumbline.catalog import default_registry
from plumbline.model import SignalResult
from plumbline.scanner import scan
from plumbline.scoring import Options, compute

index = scan("path/to/repo")
results = []
for signal in default_registry().all():
    r = signal.detect(index)
    results.append(SignalResult(
        id=signal.id, level=signal.level, family=signal.family, title=signal.title,
        status=r.status, score=r.score, confidence=r.confidence, method=r.method,
        evidence=r.evidence, notes=r.notes, fix_hint=r.fix_hint,
    ))

verdict = compute(results, Options())
print(verdict.level, verdict.name, verdict.next_gap)
```

## Scoring

`plumbline.scoring.compute(results, options)` returns a `Verdict`:

- **Level scores.** A level's score is the average score of its signals.
  Signals with status `na` are left out. A level with no counted signals
  scores 0.0.
- **Passing a level.** A level passes when its score reaches
  `Options.pass_threshold`. The default is 0.7, used when the option is 0.
- **No skipping.** The verdict is the last level passed in order before the
  first level that fails. Level 1 is the floor.
- **Minimum confidence.** `Options.min_confidence` defaults to `low`. A
  score below 1.0 whose confidence is below this minimum counts as 0.0. A
  full score of 1.0 always counts.
- **Next gap.** `next_gap` lists, in ID order, the signals one level above
  the verdict whose score is below 1.0. It is empty at level 5.

The catalog has no level 5 signals, so its results alone never take a
verdict past level 4.

## Fix plans

`plumbline.signals.fixers` has four fixers, which are also the catalog's
level 2 signals:

- `AgentInstructionsFixer`
- `ContributorGuideFixer`
- `PRTemplateFixer`
- `CommitRulesFixer`

Each fixer has two methods:

- `inputs()` lists the values it can take, as `FixInput` records.
- `plan(index, inputs)` returns a `FixPlan` of `FixOp` operations.

Building a plan writes nothing. The plans behave as follows:

- If the target file is missing, the plan creates it (`create-file`).
- If the file already exists, the plan appends a marked block to it
  (`append-file`).
- `AgentInstructionsFixer` uses the `filename` input to choose which agent
  file to create. It raises `ValueError` for a name that is not a
  recognized agent-instructions path.
- `CommitRulesFixer` always plans to create `.gitmessage`.

`plumbline.skill` builds plans that install a plumbline usage guide for a
coding-agent tool:

- `ids()` returns the target IDs: `claude`, `cursor`, `gemini`, `codex`,
  `opencode`, `windsurf`, `cline` and `copilot`.
- `targets()` and `target_by_id(target_id)` return the `Target` records.
- `new_plan_for(target_id)` builds a project-scope plan.
- `new_plan_for_global(target_id)` builds a user-scope plan. Its path is
  relative to the home directory. Only targets whose
  `supports_global()` is true accept it.
- `new_plan()` builds the Claude Code plan.

Both plan builders raise `ValueError` for an unknown target.
`new_plan_for_global` also raises it for a target without a user-scope
location.

## Reports

The `plumbline.report` package turns a `plumbline.model.Report` into
several outputs:

- **Markdown.** `markdown.render_markdown(report)` returns a markdown
  document with the verdict, the next-level gap and a table of signals for
  each level.
- **SARIF 2.1.0.** `sarif.build_sarif(report)` returns the document as
  plain data, and `sarif.render_sarif(report)` returns it as indented
  JSON. Only `missing` signals (level `error`) and `partial` signals
  (level `warning`) become rules and results.
- **History.**
  - `history.summarize_report(report)` condenses a report into a
    `HistoryEntry`.
  - `history.write_history_line(stream, entry)` writes the entry as one
    JSON line.
  - `history.append_history(path, entry)` appends the entry to a file and
    creates the file if needed. It does not create parent directories. It
    raises `HistoryError` when the file cannot be opened.
- **Progress events.** `events.EventEmitter(stream, enabled, clock)` writes
  one JSON line per call to `scan_start`, `signal_start`,
  `signal_complete` and `scan_complete`. Each line is stamped with a UTC
  `ts`. A disabled emitter writes nothing.

## Renamed signals

`plumbline.aliases` maps deprecated signal IDs to their current names.
`l2.claude-md` and `l2.copilot-instructions` both become
`l2.agent-instructions`.

- `resolve_id(signal_id)` rewrites a single ID.
- `lookup_alias(signal_id)` returns the `Alias` record, or `None` if the ID
  is not deprecated.
- `all_aliases()` lists every alias.
- `resolve_ids(ids, stream)` rewrites a list of IDs and returns the aliases
  that fired. It writes one warning per deprecated ID to `stream`, and none
  when `stream` is `None`.
- `reset_warnings()` forgets which IDs have already been warned about.

## Text helpers

`plumbline.wrapping.wrap(text, width)` word-wraps text and keeps the
newlines already in it. `indent(prefix, text, width)` wraps text so that
each line, with the prefix added, fits the width.

## What it does not do

- There is no command-line program. plumbline is used as a library.
- Nothing applies a `FixPlan` to disk. Writing the files is left to the
  caller.
- CI workflow files are not parsed. There are no signals for build or lint
  gates, coverage gates or scheduled suites. There are also no workflow
  automation signals for levels 4 and 5.
- There is no JSON verdict output or JSON Schema. The usage guide in
  `plumbline.skill` mentions commands; its text is only written into the
  plans.