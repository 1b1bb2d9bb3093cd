"""SARIF 2.1.0 output for code-scanning consumers.

Each missing or partial signal becomes one rule and one result;
found and not-applicable signals are not actionable and are omitted.
Missing maps to ``error`` and partial to ``warning``.
"""

from __future__ import annotations

import json
from typing import Any

from plumbline.model import Report, SignalResult, Status

SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
SARIF_VERSION = "2.1.0"
_HELP_DOC = "SPEC.md"


def _number(value: float) -> Any:
    return int(value) if float(value).is_integer() else value


def _severity(status: Status | str) -> str:
    status = Status(status)
    if status == Status.MISSING:
        return "error"
    if status == Status.PARTIAL:
        return "warning"
    return "note"


def _actionable(signal: SignalResult) -> bool:
    return Status(signal.status) not in (Status.FOUND, Status.NA)


def _rule(signal: SignalResult) -> dict[str, Any]:
    rule: dict[str, Any] = {"id": signal.id}
    if signal.title:
        rule["name"] = signal.title
    rule["shortDescription"] = {"text": signal.title}
    rule["helpUri"] = f"{_HELP_DOC}#{signal.id}"
    rule["help"] = {"text": signal.fix_hint}
    rule["defaultConfiguration"] = {"level": _severity(signal.status)}
    rule["properties"] = {"acmm.family": signal.family, "acmm.level": int(signal.level)}
    return rule


def _result(signal: SignalResult) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "confidence": str(signal.confidence),
        "method": str(signal.method),
    }
    if signal.notes:
        properties["notes"] = list(signal.notes)
    properties["score"] = _number(signal.score)

    result: dict[str, Any] = {
        "ruleId": signal.id,
        "level": _severity(signal.status),
        "message": {"text": signal.title or signal.id},
    }
    locations = []
    for ev in signal.evidence:
        physical: dict[str, Any] = {"artifactLocation": {"uri": ev.path}}
        if ev.span is not None:
            region: dict[str, int] = {}
            if ev.span.start:
                region["startLine"] = ev.span.start
            if ev.span.end:
                region["endLine"] = ev.span.end
            physical["region"] = region
        locations.append({"physicalLocation": physical})
    if locations:
        result["locations"] = locations
    result["properties"] = properties
    return result


def build_sarif(report: Report) -> dict[str, Any]:
    """The SARIF document for ``report`` as plain JSON-ready data."""
    actionable = [s for s in report.signals if _actionable(s)]
    driver: dict[str, Any] = {"name": "plumbline"}
    if report.tool_version:
        driver["version"] = report.tool_version
    rules = [_rule(s) for s in actionable]
    if rules:
        driver["rules"] = rules
    driver["properties"] = {"signal_set_version": report.signal_set_version}
    return {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {"driver": driver},
                "results": [_result(s) for s in actionable],
                "properties": {
                    "acmm.level": int(report.verdict.level),
                    "acmm.level_name": report.verdict.name,
                    "scanned_at": report.scanned_at,
                },
            }
        ],
    }


def render_sarif(report: Report) -> str:
    """The SARIF document for ``report`` as indented JSON text."""
    return json.dumps(build_sarif(report), indent=2, ensure_ascii=False)