import pytest

from plumbline.model import (
    SCORE_FOUND,
    SCORE_INCOMPLETE,
    SCORE_MISSING,
    SCORE_STUBBED,
    Confidence,
    Level,
    Report,
    Status,
    status_from_score,
)


def test_status_from_score_extremes():
    assert status_from_score(SCORE_FOUND) is Status.FOUND
    assert status_from_score(SCORE_MISSING) is Status.MISSING


@pytest.mark.parametrize("score", [SCORE_STUBBED, SCORE_INCOMPLETE])
def test_status_from_score_in_between_is_partial(score):
    assert status_from_score(score) is Status.PARTIAL


def test_rubric_maps_to_statuses_in_order():
    rubric = sorted([SCORE_FOUND, SCORE_INCOMPLETE, SCORE_MISSING, SCORE_STUBBED])
    assert [status_from_score(s) for s in rubric] == [
        Status.MISSING,
        Status.PARTIAL,
        Status.PARTIAL,
        Status.FOUND,
    ]


def test_level_display_names():
    assert Level.ASSISTED.display_name() == "Assisted"
    assert Level.INSTRUCTED.display_name() == "Instructed"
    assert Level.MEASURED.display_name() == "Measured"


def test_level_successor_display_name():
    successor = Level(int(Level.INSTRUCTED) + 1)
    assert successor.display_name() == "Measured"
    assert [lvl.display_name() for lvl in sorted(Level)][:3] == [
        "Assisted",
        "Instructed",
        "Measured",
    ]


@pytest.mark.parametrize("confidence", ["low", "medium", "high"])
def test_confidence_at_least_is_reflexive(confidence):
    assert Confidence(confidence).at_least(confidence) is True


def test_confidence_at_least_ordering():
    assert Confidence.HIGH.at_least(Confidence.LOW)
    assert Confidence.MEDIUM.at_least("low")
    assert not Confidence.MEDIUM.at_least(Confidence.HIGH)
    assert not Confidence.LOW.at_least(Confidence.MEDIUM)


def test_confidence_at_least_rejects_unknown():
    with pytest.raises(ValueError):
        Confidence.LOW.at_least("extreme")


def test_status_wire_values():
    assert str(status_from_score(SCORE_FOUND)) == "found"
    assert str(status_from_score(SCORE_MISSING)) == "missing"
    assert str(status_from_score(SCORE_STUBBED)) == "partial"


def test_report_defaults_are_independent():
    a = Report()
    b = Report()
    a.signals.append(object())
    assert b.signals == []
    assert a.verdict is not b.verdict and a.verdict.next_gap == []