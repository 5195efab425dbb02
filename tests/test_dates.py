from datetime import date, datetime, timedelta, timezone

import pytest

from tana_calendar.core.calendar.dates import (
    build_event_date_time_info,
    parse_date_point,
    resolve_time_zone,
)
from tana_calendar.core.calendar.schemas import DateInfo


def test_parse_date_point_kinds():
    assert parse_date_point("2025-03-03") == date(2025, 3, 3)
    assert parse_date_point("2025-03-03T09:30") == datetime(2025, 3, 3, 9, 30)
    assert parse_date_point("2025-03-03T09:30:00Z") == datetime(2025, 3, 3, 9, 30, tzinfo=timezone.utc)


def test_parse_date_point_rejects_garbage():
    with pytest.raises(ValueError):
        parse_date_point("next tuesday")


def test_single_day_is_all_day_with_exclusive_end():
    start, end = build_event_date_time_info(DateInfo(start="2025-03-03"), "Etc/UTC")

    assert start == {"date": "2025-03-03"}
    assert end == {"date": "2025-03-04"}


def test_day_range_end_is_day_after_last_day():
    start, end = build_event_date_time_info(DateInfo(start="2025-12-30", end="2026-01-02"), "Etc/UTC")

    assert start == {"date": "2025-12-30"}
    assert end == {"date": "2026-01-03"}


def test_time_range_carries_time_zone():
    start, end = build_event_date_time_info(
        DateInfo(start="2025-03-03T09:00", end="2025-03-03T10:00"), "Asia/Tokyo"
    )

    assert start == {"dateTime": "2025-03-03T09:00:00", "timeZone": "Asia/Tokyo"}
    assert end == {"dateTime": "2025-03-03T10:00:00", "timeZone": "Asia/Tokyo"}


def test_time_without_end_uses_default_duration():
    start, end = build_event_date_time_info(
        DateInfo(start="2025-03-03T23:30"), "Etc/UTC", default_duration=timedelta(minutes=45)
    )

    assert start["dateTime"] == "2025-03-03T23:30:00"
    assert end["dateTime"] == "2025-03-04T00:15:00"


def test_offset_date_times_keep_their_offset():
    start, _ = build_event_date_time_info(DateInfo(start="2025-03-03T09:00:00Z"), "Etc/UTC")

    assert start["dateTime"] == "2025-03-03T09:00:00+00:00"


def test_unknown_time_zone_is_rejected():
    with pytest.raises(ValueError):
        build_event_date_time_info(DateInfo(start="2025-03-03"), "Mars/Olympus_Mons")


def test_resolve_time_zone_accepts_iana_names():
    assert resolve_time_zone("Europe/Berlin").zone == "Europe/Berlin"


def test_sub_second_times_are_kept():
    start, end = build_event_date_time_info(
        DateInfo(start="2025-03-03T09:00:00.250", end="2025-03-03T09:00:00.900"), "Etc/UTC"
    )

    assert start["dateTime"] == "2025-03-03T09:00:00.250000"
    assert end["dateTime"] == "2025-03-03T09:00:00.900000"
