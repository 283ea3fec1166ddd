import pytest

from umpbot.context_parser import (
    build_task,
    context_from_payload,
    extract_context,
    extract_field,
    has_structured_fields,
    normalize_age_range,
    normalize_season,
    normalize_sport,
    normalize_teeball_level,
)
from umpbot.models import Context


def test_build_task_from_all_fields():
    payload = {
        "season": "Spring",
        "sport": "Teeball",
        "age_range": "U6",
        "teeball_level": "1",
        "question": "A runner may lead off",
    }
    assert build_task(payload) == (
        "Season: Spring, Sport: Teeball, Age Range: U6, "
        "Tee Ball Level: 1, Question: A runner may lead off"
    )


def test_build_task_omits_absent_optional_fields():
    payload = {"season": "Fall", "sport": "Baseball", "question": "Bunting is allowed"}
    assert build_task(payload) == "Season: Fall, Sport: Baseball, Question: Bunting is allowed"


def test_build_task_needs_an_optional_field():
    """Season and sport alone fall back to the message."""
    payload = {"season": "Fall", "sport": "Baseball", "message": "free text"}
    assert not has_structured_fields(payload)
    assert build_task(payload) == "free text"


def test_build_task_falls_back_to_message():
    assert build_task({"message": "Season: Spring, Question: x"}) == "Season: Spring, Question: x"


@pytest.mark.parametrize("payload", [{}, {"message": ""}, {"season": "Spring"}, {"message": None}])
def test_build_task_empty(payload):
    assert build_task(payload) == ""


def test_extract_field_is_case_insensitive_and_stops_at_comma():
    task = "season:  spring , SPORT: Softball, Question: is it fair"
    assert extract_field(task, "Season") == "spring"
    assert extract_field(task, "Sport") == "Softball"
    assert extract_field(task, "Question") == "is it fair"
    assert extract_field(task, "Age Range") is None


def test_extract_field_first_occurrence_wins():
    assert extract_field("Sport: Baseball, Sport: Softball", "Sport") == "Baseball"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("spring", "Spring"),
        ("  fall ", "Fall"),
        ("Spring", "Spring"),
        ("sPRING", "SPRING"),
        ("", None),
        (None, None),
    ],
)
def test_normalize_season(raw, expected):
    assert normalize_season(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Tee Ball", "Teeball"),
        ("teeball", "Teeball"),
        ("Softball", "Softball"),
        ("BASEBALL", "Baseball"),
        # "tee" has priority over "base"
        ("tee-baseball", "Teeball"),
        ("cricket", None),
        (None, None),
    ],
)
def test_normalize_sport(raw, expected):
    assert normalize_sport(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("U6", "U6"),
        ("u10", "U10"),
        ("8", "U8"),
        ("ages 12 and under", "U12"),
        ("U123", "U12"),
        ("none", None),
        (None, None),
    ],
)
def test_normalize_age_range(raw, expected):
    assert normalize_age_range(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1", "I"),
        ("I", "I"),
        ("2", "II"),
        ("ii", "II"),
        ("Level II", "II"),
        ("three", None),
        (None, None),
    ],
)
def test_normalize_teeball_level(raw, expected):
    assert normalize_teeball_level(raw) == expected


def test_extract_context_from_message():
    context = extract_context(
        "Season: spring, Sport: tee ball, Age Range: u6, Tee Ball Level: 2, Question: Can a coach pitch")
    assert context == Context(
        season="Spring",
        sport="Teeball",
        age_range="U6",
        teeball_level="II",
        question="Can a coach pitch",
    )


def test_extract_context_never_raises_on_free_text():
    assert extract_context("Is the infield fly rule in effect?") == Context()


def test_context_is_immutable():
    context = Context(season="Spring")
    with pytest.raises(AttributeError):
        context.season = "Fall"


def test_context_from_structured_payload_keeps_commas():
    payload = {
        "season": "spring",
        "sport": "softball",
        "question": "A batter, after two strikes, may bunt",
    }
    task = build_task(payload)
    context = context_from_payload(payload, task)
    assert context.season == "Spring"
    assert context.sport == "Softball"
    assert context.question == "A batter, after two strikes, may bunt"
    # The synthesized string would have cut the question at the first comma
    assert extract_context(task).question == "A batter"


def test_context_from_message_payload():
    payload = {"message": "Season: Fall, Sport: Baseball, Age Range: U10"}
    context = context_from_payload(payload, build_task(payload))
    assert context == Context(season="Fall", sport="Baseball", age_range="U10")
