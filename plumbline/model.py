"""Core data types shared by scanning, scoring, fixing and reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class Level(IntEnum):
    """A rung on the AI Codebase Maturity Model ladder."""

    ASSISTED = 1
    INSTRUCTED = 2
    MEASURED = 3
    ADAPTIVE = 4
    SELF_SUSTAINING = 5

    def display_name(self) -> str:
        """Human-readable level name, e.g. ``"Instructed"``."""
        return _LEVEL_NAMES[self]


_LEVEL_NAMES = {
    Level.ASSISTED: "Assisted",
    Level.INSTRUCTED: "Instructed",
    Level.MEASURED: "Measured",
    Level.ADAPTIVE: "Adaptive",
    Level.SELF_SUSTAINING: "Self-Sustaining",
}


class Status(str, Enum):
    """Outcome of a single signal detection."""

    FOUND = "found"
    PARTIAL = "partial"
    MISSING = "missing"
    NA = "na"

    def __str__(self) -> str:
        return self.value


class Confidence(str, Enum):
    """How much a detection result can be trusted."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value

    def at_least(self, other: Confidence | str) -> bool:
        """True when this confidence is the same as or above ``other``."""
        return _CONFIDENCE_RANK[self] >= _CONFIDENCE_RANK[Confidence(other)]


_CONFIDENCE_RANK = {Confidence.LOW: 0, Confidence.MEDIUM: 1, Confidence.HIGH: 2}


class Method(str, Enum):
    """How a detection was made."""

    FILENAME_MATCH = "filename-match"
    CONTENT_REGEX = "content-regex"
    AST = "ast"

    def __str__(self) -> str:
        return self.value


SCORE_MISSING = 0.0
SCORE_STUBBED = 0.33
SCORE_INCOMPLETE = 0.67
SCORE_FOUND = 1.0


def status_from_score(score: float) -> Status:
    """Map a rubric score onto found / partial / missing."""
    if score >= SCORE_FOUND:
        return Status.FOUND
    if score <= SCORE_MISSING:
        return Status.MISSING
    return Status.PARTIAL


@dataclass(frozen=True)
class LineSpan:
    """An inclusive range of line numbers."""

    start: int
    end: int


@dataclass
class Evidence:
    """A citation backing a detection result."""

    path: str
    excerpt: str = ""
    span: LineSpan | None = None


@dataclass
class Result:
    """What a signal detector reports."""

    status: Status = Status.MISSING
    score: float = SCORE_MISSING
    confidence: Confidence = Confidence.LOW
    method: Method = Method.FILENAME_MATCH
    evidence: list[Evidence] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    fix_hint: str = ""


@dataclass
class SignalResult:
    """A detection result together with the identity of its signal."""

    id: str = ""
    level: Level = Level.ASSISTED
    family: str = ""
    title: str = ""
    status: Status = Status.MISSING
    score: float = SCORE_MISSING
    confidence: Confidence = Confidence.LOW
    method: Method = Method.FILENAME_MATCH
    evidence: list[Evidence] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    fix_hint: str = ""


@dataclass
class Verdict:
    """The rolled-up maturity level for a repository."""

    level: Level = Level.ASSISTED
    name: str = ""
    level_scores: dict[Level, float] = field(default_factory=dict)
    next_gap: list[str] = field(default_factory=list)
    min_confidence_applied: Confidence = Confidence.LOW


@dataclass
class Report:
    """A full assessment: verdict plus every signal result."""

    schema: str = ""
    tool_version: str = ""
    signal_set_version: str = ""
    ci_system: str = ""
    repo: str = ""
    scanned_at: str = ""
    verdict: Verdict = field(default_factory=Verdict)
    signals: list[SignalResult] = field(default_factory=list)


class FixInputKind(str, Enum):
    """The shape of a value a fixer asks the user for."""

    TEXT = "text"
    MULTILINE = "multiline"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FixInput:
    """One user-supplied value a fixer needs."""

    key: str
    label: str
    help: str = ""
    kind: FixInputKind = FixInputKind.TEXT
    required: bool = False
    default: str = ""


class FixOpKind(str, Enum):
    """What a fix operation does to its file."""

    CREATE_FILE = "create-file"
    APPEND_FILE = "append-file"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FixOp:
    """A single file operation in a fix plan."""

    kind: FixOpKind
    path: str
    body: bytes = b""


@dataclass
class FixPlan:
    """The operations a fixer proposes; computing it touches no files."""

    signal_id: str
    summary: str
    ops: list[FixOp] = field(default_factory=list)