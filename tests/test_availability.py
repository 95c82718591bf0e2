# tests/test_availability.py
import uuid
from datetime import date, time

import pytest

from app.core.errors import ValidationError
from app.models.schedule import ScheduleException
from app.services.availability import (
    DEFAULT_WORKING_HOURS,
    build_calendar,
    day_of_week,
    exception_occurrences,
    is_open,
    load_working_hours,
    parse_working_hours,
)

MONDAY = date(2026, 3, 2)


def _exception(**fields) -> ScheduleException:
    data = {
        "id": uuid.uuid4(),
        "business_info_id": uuid.uuid4(),
        "title": "Off",
        "type": "closure",
        "date": MONDAY,
        "is_full_day": True,
    }
    data.update(fields)
    return ScheduleException(**data)


@pytest.fixture
def hours():
    return load_working_hours(DEFAULT_WORKING_HOURS)


def test_day_of_week_starts_on_sunday():
    assert day_of_week(date(2026, 3, 1)) == 0
    assert day_of_week(MONDAY) == 1
    assert day_of_week(date(2026, 3, 7)) == 6


def test_parse_accepts_seconds_and_sorts():
    raw = [dict(entry) for entry in reversed(DEFAULT_WORKING_HOURS)]
    raw[0]["openTime"] = "09:00:00"
    entries = parse_working_hours(raw)

    assert [e.dayOfWeek for e in entries] == list(range(7))
    assert entries[6].openTime == "09:00"


def test_parse_rejects_duplicate_day():
    raw = [dict(entry) for entry in DEFAULT_WORKING_HOURS]
    raw[6]["dayOfWeek"] = 5
    with pytest.raises(ValidationError):
        parse_working_hours(raw)


def test_parse_rejects_open_day_without_times():
    raw = [dict(entry) for entry in DEFAULT_WORKING_HOURS]
    raw[1]["closeTime"] = None
    with pytest.raises(ValidationError) as info:
        parse_working_hours(raw)
    assert info.value.message == "Invalid businessHours"


def test_load_skips_malformed_rows():
    stored = [dict(entry) for entry in DEFAULT_WORKING_HOURS]
    stored[1] = {"dayOfWeek": 1, "isOpen": True, "openTime": "late"}
    loaded = load_working_hours(stored)

    assert 1 not in loaded
    assert loaded[2].isOpen is True


def test_multi_day_full_day_span():
    exc = _exception(end_date=date(2026, 3, 4))
    assert exception_occurrences(exc, date(2026, 3, 3), date(2026, 3, 10)) == [
        (MONDAY, date(2026, 3, 4))
    ]


def test_recurring_occurrences_follow_anchor():
    exc = _exception(
        is_full_day=False,
        start_time=time(12),
        end_time=time(13),
        recurring=True,
        recurring_day=1,
    )
    spans = exception_occurrences(exc, date(2026, 2, 1), date(2026, 3, 17))

    # nothing before the anchor, then every Monday
    assert spans == [
        (MONDAY, MONDAY),
        (date(2026, 3, 9), date(2026, 3, 9)),
        (date(2026, 3, 16), date(2026, 3, 16)),
    ]


def test_calendar_range_is_half_open(hours):
    blocks = build_calendar(hours, [], MONDAY, date(2026, 3, 3))
    assert len(blocks) == 1
    assert blocks[0].start.date() == MONDAY


def test_overlapping_exceptions_are_not_merged(hours):
    a = _exception(title="A")
    b = _exception(title="B")
    blocks = build_calendar(hours, [a, b], MONDAY, date(2026, 3, 3))

    assert [blk.title for blk in blocks if blk.kind == "exception"] == ["A", "B"]


def test_is_open_inside_hours(hours):
    assert is_open(hours, [], MONDAY, time(9), time(19)) is True


def test_is_open_outside_hours(hours):
    assert is_open(hours, [], MONDAY, time(8, 30), time(9, 30)) is False


def test_is_open_closed_weekday(hours):
    assert is_open(hours, [], date(2026, 3, 7), time(10), time(11)) is False


def test_is_open_blocked_by_full_day(hours):
    closure = _exception(date=date(2026, 2, 27), end_date=date(2026, 3, 3))
    assert is_open(hours, [closure], MONDAY, time(10), time(11)) is False


def test_is_open_touching_break_is_fine(hours):
    lunch = _exception(is_full_day=False, start_time=time(12), end_time=time(13))
    assert is_open(hours, [lunch], MONDAY, time(11), time(12)) is True
    assert is_open(hours, [lunch], MONDAY, time(13), time(14)) is True
    assert is_open(hours, [lunch], MONDAY, time(11, 30), time(12, 15)) is False
