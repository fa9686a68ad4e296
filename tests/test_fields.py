import pytest

from app.client import fields


def test_title_prefers_german_then_english_then_any():
    assert fields.meeting_title({"activity_label": {"en": "Sitting", "de": "Sitzung"}}) == "Sitzung"
    assert fields.meeting_title({"activity_label": {"fr": "Séance", "en": "Sitting"}}) == "Sitting"
    assert fields.meeting_title({"activity_label": {"fr": "Séance"}}) == "Séance"


def test_title_accepts_json_ld_language_lists():
    meeting = {
        "activity_label": [
            {"@language": "fr", "@value": "Séance"},
            {"@language": "en", "@value": "Sitting"},
        ]
    }
    assert fields.meeting_title(meeting) == "Sitting"


def test_title_falls_back_to_date_then_empty():
    assert fields.meeting_title({"activity_date": "2025-01-20"}) == "20 January 2025"
    assert fields.meeting_title({}) == ""


def test_format_date():
    assert fields.format_date("2025-03-10") == "10 March 2025"
    assert fields.format_date({"@value": "2024-12-16T09:00:00Z"}) == "16 December 2024"
    assert fields.format_date("sometime in spring") == "sometime in spring"
    assert fields.format_date(None) == ""


@pytest.mark.parametrize(
    "meeting, expected",
    [
        ({"hasLocality": "http://publications.europa.eu/resource/authority/place/FRA_SXB"}, "Strasbourg"),
        ({"hasLocality": "http://publications.europa.eu/resource/authority/place/BEL_BRU"}, "BEL - BRU"),
        ({"has_locality": "place/LUX"}, "LUX"),
        ({"hasLocality": {"@id": "http://publications.europa.eu/resource/authority/place/BEL_BRU"}}, "BEL - BRU"),
        ({"hasLocality": [{"@id": "place/FRA_SXB"}]}, "Strasbourg"),
        ({}, "Strasbourg"),
    ],
)
def test_meeting_location(meeting, expected):
    assert fields.meeting_location(meeting) == expected


def test_activity_type_label():
    assert fields.activity_type_label("def/ep-activities/PLENARY_SITTING") == "Plenary sitting"
    assert fields.activity_type_label("def/ep-activities/VOTE") == "def/ep-activities/VOTE"
    assert fields.activity_type_label(None) == ""


def test_meeting_id():
    assert fields.meeting_id({"activity_id": "MTG-PL-2025-01-20"}) == "MTG-PL-2025-01-20"
    assert fields.meeting_id({"id": "eli/dl/event/MTG-PL-2025-01-21"}) == "MTG-PL-2025-01-21"


def test_decision_voters():
    decision = {
        "had_voter_favor": ["person/124831", "http://data.europarl.europa.eu/person/197490"],
        "had_voter_against": "person/1",
    }
    assert fields.decision_voters(decision, "favor") == ["124831", "197490"]
    assert fields.decision_voters(decision, "against") == ["1"]
    assert fields.decision_voters(decision, "abstention") == []


def test_vote_count_prefers_declared_number_then_voter_list():
    decision = {
        "number_of_votes_favor": [{"@value": "12"}],
        "number_of_votes_against": {"@value": "not counted"},
        "had_voter_against": ["person/1", "person/2"],
    }
    assert fields.vote_count(decision, "favor") == 12
    assert fields.vote_count(decision, "against") == 2
    assert fields.vote_count(decision, "abstention") == 0
