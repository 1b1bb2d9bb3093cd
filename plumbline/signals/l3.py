"""Level 3 (Measured) signals that work from file names and manifests."""

from __future__ import annotations

import re

from plumbline.model import (
    SCORE_FOUND,
    SCORE_INCOMPLETE,
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

_ACCEPTANCE_FILE_RE = re.compile(
    r"(?i)(auto-qa-tuning|acceptance[-_]rates?|acceptance[-_]rate)\.(json|yaml|yml)$"
)
_METRICS_DIR_RE = re.compile(r"(?i)^metrics/.*\.(json|yaml|yml)$")

_ERROR_MONITOR_MARKERS = (
    b"@sentry/",
    b"github.com/getsentry/sentry-go",
    b"sentry_sdk",
    b"@sentry/browser",
    b"@sentry/node",
    b"opentelemetry",
    b"@opentelemetry/",
    b"go.opentelemetry.io/otel",
    b"Bugsnag",
    b"rollbar",
    b"datadog/dd-trace",
)

_ERROR_MONITOR_PATHS = (
    "package.json",
    "go.mod",
    "requirements.txt",
    "pyproject.toml",
    "Pipfile",
    "Gemfile",
    "Cargo.toml",
)

# Loose on the name; the path constraint below rules out false positives.
_NPS_FILE_RE = re.compile(
    r"(?i)(nps|csat|survey|feedback).*\.(ts|tsx|js|jsx|vue|py|go|rb|kt|swift)$"
)
_FEEDBACK_TEMPLATE_RE = re.compile(r"(?i)\.github/ISSUE_TEMPLATE/(feedback|nps|survey)")
_USER_FEEDBACK_PATH_RE = re.compile(
    r"(?i)^(web|src|app|frontend|ui|components|pages|hooks|routes|lib)/"
)


def _read_or_empty(index: RepoIndex, path: str) -> bytes:
    try:
        return index.read(path)
    except (OSError, ValueError):
        return b""


def _any_by_name_matches(index: RepoIndex, pattern: re.Pattern[str]) -> str | None:
    for base, paths in index.by_name.items():
        if pattern.search(base):
            return paths[0]
    return None


def _any_path_matches(index: RepoIndex, pattern: re.Pattern[str]) -> str | None:
    return next((f.path for f in index.files if pattern.search(f.path)), None)


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


class AcceptanceTracking(Signal):
    """A tracked metrics file of AI acceptance rates."""

    id = "l3.acceptance-tracking"
    level = Level.MEASURED
    family = "monitoring"
    title = "Tracked metrics file (acceptance rates / auto-qa-tuning)"

    def detect(self, index: RepoIndex) -> Result:
        path = _any_by_name_matches(index, _ACCEPTANCE_FILE_RE)
        if path is not None:
            return Result(
                status=Status.FOUND,
                score=SCORE_FOUND,
                confidence=Confidence.HIGH,
                method=Method.FILENAME_MATCH,
                evidence=[Evidence(path=path)],
            )
        path = _any_path_matches(index, _METRICS_DIR_RE)
        if path is not None:
            return Result(
                status=Status.PARTIAL,
                score=SCORE_INCOMPLETE,
                confidence=Confidence.LOW,
                method=Method.FILENAME_MATCH,
                evidence=[Evidence(path=path)],
                notes=["metrics/ file present but not the canonical name"],
            )
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.MEDIUM,
            method=Method.FILENAME_MATCH,
            notes=["no auto-qa-tuning.json / acceptance-rates.* or metrics/* file found"],
            fix_hint=(
                "Track AI agent acceptance rates: commit "
                "auto-qa-tuning.json (or acceptance-rates.json) and update it "
                "from a scheduled job that classifies merged-vs-rejected PRs by "
                "category. This is what L4 self-tuning consumes."
            ),
        )


class ErrorMonitoring(Signal):
    """An error-monitoring SDK declared in a dependency manifest."""

    id = "l3.error-monitoring"
    level = Level.MEASURED
    family = "monitoring"
    title = "Error-monitoring SDK declared in dependency manifest"

    def detect(self, index: RepoIndex) -> Result:
        for path in _ERROR_MONITOR_PATHS:
            data = _read_or_empty(index, path)
            if not data:
                continue
            marker = next((m for m in _ERROR_MONITOR_MARKERS if m in data), None)
            if marker is not None:
                return Result(
                    status=Status.FOUND,
                    score=SCORE_FOUND,
                    confidence=Confidence.MEDIUM,
                    method=Method.CONTENT_REGEX,
                    evidence=[Evidence(path=path, excerpt=marker.decode())],
                )
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.LOW,
            method=Method.CONTENT_REGEX,
            notes=[
                "no Sentry / OpenTelemetry / Bugsnag / similar dependency found",
                "low confidence — only checks dependency manifests, not runtime config",
            ],
            fix_hint=(
                "Wire in an error-monitoring SDK (Sentry, OpenTelemetry, or "
                "equivalent). Without runtime error signals, AI agents can't "
                "distinguish 'this fix worked' from 'this fix silently broke prod.'"
            ),
        )


class UserFeedback(Signal):
    """A user-feedback, NPS or survey channel in the repository."""

    id = "l3.user-feedback"
    level = Level.MEASURED
    family = "feedback"
    title = "User-feedback / NPS / survey channel wired up"

    def detect(self, index: RepoIndex) -> Result:
        path = _any_path_matches(index, _FEEDBACK_TEMPLATE_RE)
        if path is None:
            path = next(
                (
                    f.path
                    for f in index.files
                    if _NPS_FILE_RE.search(_basename(f.path))
                    and _USER_FEEDBACK_PATH_RE.search(f.path)
                ),
                None,
            )
        if path is not None:
            return Result(
                status=Status.FOUND,
                score=SCORE_FOUND,
                confidence=Confidence.MEDIUM,
                method=Method.FILENAME_MATCH,
                evidence=[Evidence(path=path)],
            )
        return Result(
            status=Status.MISSING,
            score=SCORE_MISSING,
            confidence=Confidence.LOW,
            method=Method.FILENAME_MATCH,
            notes=[
                "no NPS / survey component or feedback issue template found",
                "low confidence — name match only",
            ],
            fix_hint=(
                "Add a lightweight user-feedback channel: an NPS / CSAT "
                "survey component (e.g. web/src/hooks/useNPSSurvey.ts), or a "
                ".github/ISSUE_TEMPLATE/feedback.md so users can report what "
                "shipped wrong."
            ),
        )