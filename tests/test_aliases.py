import io

from plumbline.aliases import (
    all_aliases,
    lookup_alias,
    reset_warnings,
    resolve_id,
    resolve_ids,
)


def test_resolve_id_known_alias_rewrites():
    assert resolve_id("l2.claude-md") == "l2.agent-instructions"
    assert lookup_alias("l2.claude-md") is not None


def test_resolve_id_unknown_passes_through():
    assert resolve_id("l3.coverage-gate") == "l3.coverage-gate"
    assert lookup_alias("l3.coverage-gate") is None


def test_resolve_ids_rewrites_mixed_list():
    reset_warnings()
    got, fired = resolve_ids(
        ["l2.claude-md", "l3.coverage-gate", "l2.copilot-instructions"], None
    )
    assert got == [
        "l2.agent-instructions",
        "l3.coverage-gate",
        "l2.agent-instructions",
    ]
    assert len(fired) == 2


def test_resolve_ids_warns_once():
    reset_warnings()
    out = io.StringIO()
    resolve_ids(["l2.claude-md", "l2.claude-md"], out)
    text = out.getvalue()
    assert text.count("deprecated since signal-set") == 1
    assert "l2.claude-md" in text
    assert "l2.agent-instructions" in text


def test_discard_does_not_mark_warned():
    reset_warnings()
    resolve_ids(["l2.claude-md"], None)
    out = io.StringIO()
    resolve_ids(["l2.claude-md"], out)
    assert "deprecated" in out.getvalue()


def test_reset_allows_warning_again():
    reset_warnings()
    first = io.StringIO()
    resolve_ids(["l2.copilot-instructions"], first)
    reset_warnings()
    second = io.StringIO()
    resolve_ids(["l2.copilot-instructions"], second)
    assert first.getvalue() == second.getvalue()
    assert "l2.copilot-instructions" in second.getvalue()


def test_empty_input():
    assert resolve_ids([], io.StringIO()) == ([], [])


def test_all_aliases_deterministic():
    first = [a.from_id for a in all_aliases()]
    second = [a.from_id for a in all_aliases()]
    assert first == second
    assert first == sorted(first)


def test_lookup_alias_known_and_unknown():
    alias = lookup_alias("l2.claude-md")
    assert alias is not None
    assert alias.since and alias.reason
    assert lookup_alias("nope") is None