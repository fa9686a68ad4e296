"""Display fields derived from loosely structured open-data records.

Every helper accepts partial input and falls back instead of raising.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

TITLE_LANGUAGES = ("de", "en")

DEFAULT_LOCATION = "Strasbourg"
KNOWN_LOCATIONS = {"FRA_SXB": "Strasbourg"}
LOCATION_SEPARATOR = " - "

ACTIVITY_TYPE_LABELS = {"PLENARY_SITTING": "Plenary sitting"}

VOTE_CATEGORIES = {
    "favor": "had_voter_favor",
    "against": "had_voter_against",
    "abstention": "had_voter_abstention",
}

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _literal(value: Any) -> Optional[str]:
    """Unwrap JSON-LD value and reference objects and single-item lists."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, Mapping):
        value = value.get("@value", value.get("@id"))
    if value is None:
        return None
    return str(value)


def _labels(value: Any) -> dict[str, str]:
    if isinstance(value, str):
        return {"": value}
    if isinstance(value, Mapping):
        if "@value" in value:
            return {value.get("@language", ""): str(value["@value"])}
        return {str(lang): str(text) for lang, text in value.items() if text}
    if isinstance(value, list):
        labels: dict[str, str] = {}
        for item in value:
            for lang, text in _labels(item).items():
                labels.setdefault(lang, text)
        return labels
    return {}


def meeting_date(meeting: Mapping[str, Any]) -> Optional[str]:
    for key in ("activity_date", "activity_start_date", "date"):
        value = _literal(meeting.get(key))
        if value:
            return value
    return None


def format_date(value: Any) -> str:
    raw = _literal(value)
    if not raw:
        return ""
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return raw
    return f"{parsed.day} {MONTH_NAMES[parsed.month - 1]} {parsed.year}"


def record_label(record: Mapping[str, Any]) -> str:
    labels = _labels(record.get("activity_label"))
    for language in TITLE_LANGUAGES:
        if labels.get(language):
            return labels[language]
    for text in labels.values():
        if text:
            return text
    return ""


def meeting_title(meeting: Mapping[str, Any]) -> str:
    return record_label(meeting) or format_date(meeting_date(meeting))


def meeting_location(meeting: Mapping[str, Any]) -> str:
    locality = _literal(meeting.get("hasLocality") or meeting.get("has_locality"))
    if not locality:
        return DEFAULT_LOCATION
    code = locality.rstrip("/").rsplit("/", 1)[-1]
    if code in KNOWN_LOCATIONS:
        return KNOWN_LOCATIONS[code]
    return code.replace("_", LOCATION_SEPARATOR)


def activity_type_label(value: Any) -> str:
    raw = _literal(value) or ""
    constant = raw.rsplit("/", 1)[-1]
    return ACTIVITY_TYPE_LABELS.get(constant, raw)


def meeting_id(meeting: Mapping[str, Any]) -> str:
    activity_id = _literal(meeting.get("activity_id"))
    if activity_id:
        return activity_id
    return last_segment(meeting.get("id"))


def last_segment(value: Any) -> str:
    return (_literal(value) or "").rstrip("/").rsplit("/", 1)[-1]


def voter_id(reference: Any) -> str:
    """``person/124831`` and full person URIs both map to ``124831``."""
    return last_segment(reference)


def decision_id(decision: Mapping[str, Any]) -> str:
    return _literal(decision.get("activity_id")) or _literal(decision.get("id")) or ""


def decision_voters(decision: Mapping[str, Any], category: str) -> list[str]:
    refs = decision.get(VOTE_CATEGORIES[category]) or []
    if not isinstance(refs, list):
        refs = [refs]
    return [voter for voter in (voter_id(ref) for ref in refs) if voter]


def number(value: Any) -> Optional[int]:
    raw = _literal(value)
    if raw is None:
        return None
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return None


def vote_count(decision: Mapping[str, Any], category: str) -> int:
    """Declared ``number_of_votes_*`` count, else the length of the voter list."""
    count = number(decision.get(f"number_of_votes_{category}"))
    if count is None:
        return len(decision_voters(decision, category))
    return count
