"""Render a report as a committable markdown document."""

from __future__ import annotations

from collections import defaultdict

from plumbline.model import Level, Report, SignalResult

_TABLE_LEVELS = (
    Level.INSTRUCTED,
    Level.MEASURED,
    Level.ADAPTIVE,
    Level.SELF_SUSTAINING,
)


def render_markdown(report: Report) -> str:
    """The markdown maturity report for ``report``."""
    verdict = report.verdict
    verdict_level = int(verdict.level)
    out: list[str] = [
        "# Plumbline Maturity Report\n\n",
        f"- **Repo:** `{report.repo}`\n",
        f"- **Scanned:** {report.scanned_at}\n",
        f"- **Tool:** plumbline {report.tool_version} · "
        f"signal-set {report.signal_set_version}\n\n",
        "## Verdict\n\n",
        f"**Level {verdict_level} — {verdict.name}**\n\n",
        "| Level | Name | Score |\n",
        "|-------|------|-------|\n",
    ]
    for lvl in _TABLE_LEVELS:
        score = verdict.level_scores.get(lvl, 0.0)
        if lvl == verdict_level:
            marker = " ✓"
        elif lvl == verdict_level + 1:
            marker = " ← next"
        else:
            marker = ""
        out.append(
            f"| L{int(lvl)} | {lvl.display_name()} | {score * 100:.0f}%{marker} |\n"
        )
    out.append("\n")

    if verdict.next_gap:
        out.append(f"## Next-level gap (to reach L{verdict_level + 1})\n\n")
        by_id = {s.id: s for s in report.signals}
        for signal_id in verdict.next_gap:
            signal = by_id.get(signal_id, SignalResult(id=signal_id))
            out.append(f"- [ ] `{signal_id}` — {signal.title}\n")
            if signal.fix_hint:
                out.append(f"  - Fix: {signal.fix_hint}\n")
        out.append("\n")

    by_level: dict[int, list[SignalResult]] = defaultdict(list)
    for signal in report.signals:
        by_level[int(signal.level)].append(signal)
    for lvl in _TABLE_LEVELS:
        signals = sorted(by_level.get(int(lvl), []), key=lambda s: s.id)
        if not signals:
            continue
        out.append(f"## L{int(lvl)} — {lvl.display_name()}\n\n")
        out.append("| Signal | Status | Score | Confidence |\n")
        out.append("|--------|--------|-------|------------|\n")
        for s in signals:
            out.append(f"| `{s.id}` | {s.status} | {s.score:.2f} | {s.confidence} |\n")
        out.append("\n")

    out.append("---\n")
    out.append("_Generated by plumbline._\n")
    return "".join(out)