import json

from plumbline.model import (
    Confidence,
    Evidence,
    Level,
    LineSpan,
    Method,
    Report,
    SignalResult,
    Status,
    Verdict,
)
from plumbline.report.sarif import build_sarif, render_sarif


def sample_report():
    return Report(
        schema="plumbline/v1",
        tool_version="test",
        signal_set_version="v1",
        repo="/repo",
        scanned_at="2026-04-28T15:00:00Z",
        verdict=Verdict(
            level=Level.INSTRUCTED,
            name="Instructed",
            level_scores={Level.INSTRUCTED: 1.0},
        ),
        signals=[
            SignalResult(
                id="l2.found-thing", level=Level.INSTRUCTED, family="instructions",
                title="Found thing", status=Status.FOUND, score=1.0,
                confidence=Confidence.HIGH, method=Method.FILENAME_MATCH,
            ),
            SignalResult(
                id="l2.missing-thing", level=Level.INSTRUCTED, family="instructions",
                title="Missing thing", status=Status.MISSING, score=0.0,
                confidence=Confidence.MEDIUM, method=Method.CONTENT_REGEX,
                fix_hint="add a thing", notes=["why it matters"],
                evidence=[Evidence(path="README.md", span=LineSpan(1, 5))],
            ),
            SignalResult(
                id="l3.partial-thing", level=Level.MEASURED, family="metrics",
                title="Partial thing", status=Status.PARTIAL, score=0.5,
                confidence=Confidence.LOW, method=Method.FILENAME_MATCH,
            ),
            SignalResult(
                id="l3.na-thing", level=Level.MEASURED, family="metrics",
                status=Status.NA, score=0.0,
            ),
        ],
    )


def _doc():
    return json.loads(render_sarif(sample_report()))


def _result(doc, rule_id):
    return next(r for r in doc["runs"][0]["results"] if r["ruleId"] == rule_id)


def test_envelope_shape():
    doc = _doc()
    assert doc["version"] == "2.1.0"
    assert doc["$schema"].startswith("https://")
    assert len(doc["runs"]) == 1


def test_only_emits_actionable_findings():
    doc = _doc()
    ids = [r["ruleId"] for r in doc["runs"][0]["results"]]
    assert sorted(ids) == ["l2.missing-thing", "l3.partial-thing"]


def test_severity_mapping():
    doc = _doc()
    assert _result(doc, "l2.missing-thing")["level"] == "error"
    assert _result(doc, "l3.partial-thing")["level"] == "warning"


def test_rule_has_fix_hint_and_help_uri():
    doc = _doc()
    rules = doc["runs"][0]["tool"]["driver"]["rules"]
    rule = next(r for r in rules if r["id"] == "l2.missing-thing")
    assert rule["help"]["text"] == "add a thing"
    assert "l2.missing-thing" in rule["helpUri"]
    assert rule["defaultConfiguration"] == {"level": "error"}
    assert rule["properties"] == {"acmm.family": "instructions", "acmm.level": 2}


def test_location_carries_evidence_line_span():
    result = _result(_doc(), "l2.missing-thing")
    assert len(result["locations"]) == 1
    physical = result["locations"][0]["physicalLocation"]
    assert physical["artifactLocation"]["uri"] == "README.md"
    assert physical["region"] == {"startLine": 1, "endLine": 5}


def test_result_properties_include_score_and_confidence():
    result = _result(_doc(), "l2.missing-thing")
    props = result["properties"]
    assert props["confidence"] == "medium"
    assert props["method"] == "content-regex"
    assert props["score"] == 0
    assert props["notes"] == ["why it matters"]
    assert result["message"]["text"] == "Missing thing"


def test_empty_report_produces_valid_envelope():
    report = Report(schema="plumbline/v1", tool_version="test", signal_set_version="v1")
    doc = json.loads(render_sarif(report))
    assert len(doc["runs"]) == 1
    assert doc["runs"][0]["results"] == []
    assert "rules" not in doc["runs"][0]["tool"]["driver"]


def test_build_sarif_run_properties():
    doc = build_sarif(sample_report())
    run = doc["runs"][0]
    assert run["properties"] == {
        "acmm.level": 2,
        "acmm.level_name": "Instructed",
        "scanned_at": "2026-04-28T15:00:00Z",
    }
    assert run["tool"]["driver"]["version"] == "test"
    assert run["tool"]["driver"]["properties"] == {"signal_set_version": "v1"}


def test_message_falls_back_to_id_without_title():
    report = Report(
        signals=[SignalResult(id="l4.untitled", status=Status.MISSING)]
    )
    result = build_sarif(report)["runs"][0]["results"][0]
    assert result["message"]["text"] == "l4.untitled"
    assert "locations" not in result