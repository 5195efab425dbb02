import pytest
from pydantic import ValidationError

from tana_calendar.core.calendar.schemas import (
    DateInfo,
    EventData,
    Invalid,
    PartialEventData,
    PostEventQuery,
    PutEventQuery,
    Valid,
    validate_model,
)

DATE = {"start": "2025-03-03T09:00", "end": "2025-03-03T10:00"}


def test_event_data_defaults_and_trimming():
    data = EventData.model_validate({"name": "  Standup  ", "date": DATE, "location": " Room 1 "})

    assert data.name == "Standup"
    assert data.description == ""
    assert data.location == "Room 1"
    assert data.time_zone is None


def test_event_data_is_immutable():
    data = EventData.model_validate({"name": "Standup", "date": DATE})
    with pytest.raises(ValidationError):
        data.name = "Retro"


def test_validate_model_aggregates_all_errors():
    result = validate_model(
        EventData,
        {"name": "   ", "date": DATE, "timeZone": "Nowhere/Town", "location": "x" * 1025},
    )

    assert isinstance(result, Invalid)
    assert result.ok is False
    assert result.errors == [
        "name: Event name is required",
        "timeZone: Invalid timezone format",
        "location: Location is too long",
    ]


def test_validate_model_reports_missing_fields():
    result = validate_model(EventData, {})

    assert not result.ok
    assert "name: Field required" in result.errors
    assert "date: Field required" in result.errors


def test_validate_model_returns_value():
    result = validate_model(EventData, {"name": "Standup", "date": DATE})

    assert isinstance(result, Valid)
    assert result.ok is True
    assert result.value.name == "Standup"


def test_empty_time_zone_has_its_own_message():
    result = validate_model(EventData, {"name": "Standup", "date": DATE, "timeZone": ""})

    assert result.errors == ["timeZone: Time zone cannot be empty"]


def test_time_zone_is_canonicalized():
    data = EventData.model_validate({"name": "Standup", "date": DATE, "timeZone": "europe/berlin"})

    assert data.time_zone == "Europe/Berlin"


def test_partial_tracks_present_fields():
    data = PartialEventData.model_validate({"description": "", "timeZone": "Europe/Berlin", "color": "red"})

    assert data.model_fields_set == {"description", "time_zone"}
    assert data.is_present("description")
    assert not data.is_present("name")
    assert data.description == ""
    assert data.has_changes


def test_partial_empty_body_has_no_changes():
    assert not PartialEventData.model_validate({}).has_changes


def test_partial_rejects_null():
    result = validate_model(PartialEventData, {"description": None})

    assert result.errors == [
        "description: Field cannot be null; omit it to leave the value unchanged"
    ]


def test_partial_keeps_name_non_empty():
    result = validate_model(PartialEventData, {"name": ""})

    assert result.errors == ["name: Event name is required"]


def test_date_info_rejects_mixed_kinds():
    result = validate_model(EventData, {"name": "x", "date": {"start": "2025-03-03", "end": "2025-03-03T10:00"}})

    assert result.errors == ["date: Date start and end must both be dates or both be date-times"]


def test_date_info_rejects_reversed_range():
    result = validate_model(DateInfo, {"start": "2025-03-05", "end": "2025-03-03"})

    assert result.errors == ["Date end is before start"]


def test_date_info_rejects_unparsable_point():
    result = validate_model(DateInfo, {"start": "tomorrow"})

    assert result.errors == ["start: Invalid date, expected YYYY-MM-DD or YYYY-MM-DDTHH:MM[:SS]"]


def test_query_models():
    assert validate_model(PostEventQuery, {"to": "cal-1"}).value.to == "cal-1"
    assert validate_model(PostEventQuery, {"to": ""}).errors == ["to: Calendar ID cannot be empty"]

    put = validate_model(PutEventQuery, {"from": "cal-1"}).value
    assert put.from_ == "cal-1"
    assert put.to is None
    assert validate_model(PutEventQuery, {}).errors == ["from: Field required"]
