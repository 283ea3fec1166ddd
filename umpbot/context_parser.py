import logging
import re

from .constants import SPORTS, TASK_LABELS
from .models import Context

logger = logging.getLogger(__name__)

STRUCTURED_OPTIONAL_FIELDS = ("age_range", "teeball_level", "question")

_AGE_RANGE_RE = re.compile(r"u?\d{1,2}", re.IGNORECASE)
_LEVEL_TWO_RE = re.compile(r"2|ii", re.IGNORECASE)
_LEVEL_ONE_RE = re.compile(r"1|i", re.IGNORECASE)


def _field_value(payload, key):
    """Returns a payload field as a string, or None when it is missing or blank."""
    value = payload.get(key)
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def has_structured_fields(payload):
    """Checks whether a payload carries enough discrete fields to skip free text.

    Season and sport are both required, plus at least one of age range,
    tee-ball level or question.
    """
    if not _field_value(payload, "season") or not _field_value(payload, "sport"):
        return False
    return any(_field_value(payload, key) for key in STRUCTURED_OPTIONAL_FIELDS)


def build_task(payload):
    """Builds the task string for a request payload.

    Args:
        payload (dict): The parsed request body.

    Returns:
        str: A comma-joined "Label: value" string when structured fields are
        present, otherwise the raw ``message`` (or an empty string).
    """
    if has_structured_fields(payload):
        parts = []
        for key, label in TASK_LABELS:
            value = _field_value(payload, key)
            if value:
                parts.append(f"{label}: {value}")
        return ", ".join(parts)

    message = payload.get("message")
    return str(message) if message else ""


def extract_field(task, label):
    """Returns the value of the first ``<label>: <value>`` pair in ``task``.

    The match is case-insensitive and the value stops at the next comma.
    """
    match = re.search(rf"{re.escape(label)}:\s*([^,]+)", task, re.IGNORECASE)
    return match.group(1).strip() if match else None


def normalize_season(value):
    """Trims a season name and capitalizes its first character, e.g. "spring" -> "Spring"."""
    if not value:
        return None
    value = str(value).strip()
    if not value:
        return None
    return value[0].upper() + value[1:]


def normalize_sport(value):
    """Maps free text to Teeball, Softball or Baseball by substring, checked in that order.

    Args:
        value (str): The raw sport value.

    Returns:
        str: The canonical sport name, or None if nothing matches.
    """
    if not value:
        return None
    lowered = str(value).strip().lower()
    for needle, sport in SPORTS:
        if needle in lowered:
            return sport
    return None


def normalize_age_range(value):
    """Renders the first one or two digit age token as "U<n>", e.g. "u10" -> "U10"."""
    if not value:
        return None
    match = _AGE_RANGE_RE.search(str(value))
    if not match:
        return None
    digits = re.sub(r"[^0-9]", "", match.group(0))
    return f"U{digits}"


def normalize_teeball_level(value):
    """Returns "II" for values containing 2 or ii, "I" for 1 or i, else None."""
    if not value:
        return None
    value = str(value)
    if _LEVEL_TWO_RE.search(value):
        return "II"
    if _LEVEL_ONE_RE.search(value):
        return "I"
    return None


def make_context(season=None, sport=None, age_range=None, teeball_level=None,
                 question=None):
    """Creates a Context, normalizing every raw field."""
    question = question.strip() if isinstance(question, str) else question
    return Context(
        season=normalize_season(season),
        sport=normalize_sport(sport),
        age_range=normalize_age_range(age_range),
        teeball_level=normalize_teeball_level(teeball_level),
        question=question or None,
    )


def extract_context(task):
    """Parses a Context out of a free-text task string. Never raises."""
    return make_context(
        season=extract_field(task, "Season"),
        sport=extract_field(task, "Sport"),
        age_range=extract_field(task, "Age Range"),
        teeball_level=extract_field(task, "Tee Ball Level"),
        question=extract_field(task, "Question"),
    )


def context_from_payload(payload, task):
    """Returns the Context for a request.

    Structured payloads are normalized field by field so values containing
    commas are kept whole; free-text messages are parsed from ``task``.
    """
    if has_structured_fields(payload):
        context = make_context(**{
            key: _field_value(payload, key) for key, _label in TASK_LABELS
        })
    else:
        context = extract_context(task)
    logger.debug("Resolved context: %s", context.to_dict())
    return context
