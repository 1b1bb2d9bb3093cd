from plumbline.model import (
    Confidence,
    Level,
    Method,
    Report,
    SignalResult,
    Status,
    Verdict,
)
from plumbline.report.markdown import render_markdown


def sample_report():
    return Report(
        schema="plumbline/v1",
        tool_version="1.0.0",
        signal_set_version="v1",
        ci_system="github-actions",
        repo="/abs/path",
        scanned_at="2026-04-28T15:00:00Z",
        verdict=Verdict(
            level=Level.INSTRUCTED,
            name="Instructed",
            level_scores={
                Level.INSTRUCTED: 1.0,
                Level.MEASURED: 0.5,
                Level.ADAPTIVE: 0.0,
                Level.SELF_SUSTAINING: 0.0,
            },
            next_gap=["l3.coverage-gate"],
            min_confidence_applied=Confidence.LOW,
        ),
        signals=[
            SignalResult(
                id="l2.claude-md", level=Level.INSTRUCTED, family="instructions",
                status=Status.FOUND, score=1.0, confidence=Confidence.HIGH,
                method=Method.CONTENT_REGEX,
            ),
            SignalResult(
                id="l3.coverage-gate", level=Level.MEASURED, family="coverage",
                title="Coverage gate", status=Status.MISSING, score=0.0,
                confidence=Confidence.HIGH, method=Method.CONTENT_REGEX,
                fix_hint="add codecov.yml",
            ),
        ],
    )


def test_contains_expected_sections():
    got = render_markdown(sample_report())
    for want in (
        "# Plumbline Maturity Report",
        "**Level 2 — Instructed**",
        "Next-level gap (to reach L3)",
        "`l3.coverage-gate`",
        "L2 — Instructed",
        "L3 — Measured",
    ):
        assert want in got


def test_level_table_markers_and_percentages():
    got = render_markdown(sample_report())
    assert "| L2 | Instructed | 100% ✓ |\n" in got
    assert "| L3 | Measured | 50% ← next |\n" in got
    assert "| L4 | Adaptive | 0% |\n" in got


def test_gap_entry_includes_title_and_fix():
    got = render_markdown(sample_report())
    assert "- [ ] `l3.coverage-gate` — Coverage gate\n  - Fix: add codecov.yml\n" in got


def test_signal_rows_and_footer():
    got = render_markdown(sample_report())
    assert "| `l2.claude-md` | found | 1.00 | high |\n" in got
    assert "| `l3.coverage-gate` | missing | 0.00 | high |\n" in got
    assert got.endswith("---\n_Generated by plumbline._\n")


def test_no_gap_section_and_empty_levels_skipped():
    report = sample_report()
    report.verdict.next_gap = []
    got = render_markdown(report)
    assert "Next-level gap" not in got
    assert "## L4 — Adaptive" not in got