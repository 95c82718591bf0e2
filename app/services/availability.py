# app/services/availability.py
"""
Availability model: weekly working hours + schedule exceptions.

Pure functions, no database access. Every time is a naive
business-local value; nothing is converted between timezones.

Conventions:
  - weekdays use 0=Sunday .. 6=Saturday (as stored by the frontend)
  - date ranges are half-open: [start, end)
  - exceptions are overlays; overlapping exceptions are neither merged
    nor deduplicated, each occurrence yields its own block
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Iterator

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from app.models.schedule import ScheduleException
from app.schemas.business import WorkingHours
from app.schemas.schedule import CalendarBlock

logger = logging.getLogger(__name__)

# Mon-Fri 09:00-19:00, weekend closed
DEFAULT_WORKING_HOURS: list[dict[str, Any]] = [
    {
        "dayOfWeek": day,
        "isOpen": 1 <= day <= 5,
        "openTime": "09:00",
        "closeTime": "19:00",
    }
    for day in range(7)
]


def day_of_week(day: date) -> int:
    """Python's Monday=0 weekday mapped to the stored Sunday=0 convention."""
    return (day.weekday() + 1) % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day < end:
        yield day
        day += timedelta(days=1)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """True if [a_start, a_end) intersects [b_start, b_end)."""
    return a_start < b_end and a_end > b_start


# ---------------------------------------------------------------------------
# Working hours
# ---------------------------------------------------------------------------


def parse_working_hours(raw: Any) -> list[WorkingHours]:
    """
    Validate a client-supplied weekly table.

    Rules:
      - must be an array
      - every entry is a valid WorkingHours (open < close when open)
      - exactly one entry per weekday 0..6

    Returns:
        Entries sorted by dayOfWeek.

    Raises:
        ValidationError(400)
    """
    if not isinstance(raw, list):
        raise ValidationError("businessHours must be an array")

    entries: list[WorkingHours] = []
    problems: list[str] = []
    for idx, item in enumerate(raw):
        try:
            entries.append(WorkingHours.model_validate(item))
        except PydanticValidationError as exc:
            for err in exc.errors():
                problems.append(f"businessHours[{idx}]: {err['msg']}")

    if problems:
        raise ValidationError("Invalid businessHours", details=problems)

    days = sorted(entry.dayOfWeek for entry in entries)
    if days != list(range(7)):
        raise ValidationError(
            "businessHours must contain exactly one entry per weekday (0-6)"
        )

    return sorted(entries, key=lambda entry: entry.dayOfWeek)


def load_working_hours(stored: Iterable[dict[str, Any]]) -> dict[int, WorkingHours]:
    """
    Index stored hours by weekday.

    Stored rows predating validation may be malformed; those are
    skipped (treated as closed) instead of failing the whole calendar.
    """
    by_day: dict[int, WorkingHours] = {}
    for item in stored:
        try:
            entry = WorkingHours.model_validate(item)
        except PydanticValidationError:
            logger.warning(f"[availability] Ignoring malformed working hours row: {item}")
            continue
        by_day[entry.dayOfWeek] = entry
    return by_day


def working_hours_blocks(
    hours: dict[int, WorkingHours],
    start: date,
    end: date,
) -> list[CalendarBlock]:
    """Background block for every open day in [start, end)."""
    blocks: list[CalendarBlock] = []
    for day in iter_days(start, end):
        entry = hours.get(day_of_week(day))
        if entry is None or not entry.isOpen:
            continue
        blocks.append(
            CalendarBlock(
                id=f"wh_{day.isoformat()}",
                kind="working_hours",
                title="Working Hours",
                start=datetime.combine(day, entry.open_time),
                end=datetime.combine(day, entry.close_time),
            )
        )
    return blocks


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


def _last_day(exc: ScheduleException) -> date:
    """Inclusive last day covered by the anchor occurrence."""
    if exc.is_full_day and exc.end_date and exc.end_date > exc.date:
        return exc.end_date
    return exc.date


def exception_occurrences(
    exc: ScheduleException,
    start: date,
    end: date,
) -> list[tuple[date, date]]:
    """
    (first_day, last_day) spans of an exception intersecting [start, end).

    - The anchor occurrence spans date..end_date (full day) or date only.
    - Recurring exceptions also occur on every `recurring_day` after the
      anchor date; those occurrences are always a single day.
    """
    spans: list[tuple[date, date]] = []

    last = _last_day(exc)
    if exc.date < end and last >= start:
        spans.append((exc.date, last))

    if exc.recurring and exc.recurring_day is not None:
        for day in iter_days(max(start, exc.date + timedelta(days=1)), end):
            if day_of_week(day) == exc.recurring_day:
                spans.append((day, day))

    return spans


def _exception_block(exc: ScheduleException, first: date, last: date) -> CalendarBlock | None:
    block_id = str(exc.id) if first == exc.date else f"{exc.id}_{first.isoformat()}"

    if exc.is_full_day:
        return CalendarBlock(
            id=block_id,
            kind="exception",
            title=exc.title,
            type=exc.type,
            start=datetime.combine(first, time.min),
            end=datetime.combine(last + timedelta(days=1), time.min),
            allDay=True,
            exceptionId=exc.id,
        )

    if exc.start_time is None or exc.end_time is None:
        logger.warning(f"[availability] Timed exception {exc.id} has no time range")
        return None

    return CalendarBlock(
        id=block_id,
        kind="exception",
        title=exc.title,
        type=exc.type,
        start=datetime.combine(first, exc.start_time),
        end=datetime.combine(first, exc.end_time),
        exceptionId=exc.id,
    )


def exception_blocks(
    exceptions: Iterable[ScheduleException],
    start: date,
    end: date,
) -> list[CalendarBlock]:
    """Overlay blocks for every exception occurrence intersecting [start, end)."""
    blocks: list[CalendarBlock] = []
    for exc in exceptions:
        for first, last in exception_occurrences(exc, start, end):
            block = _exception_block(exc, first, last)
            if block is not None:
                blocks.append(block)
    return blocks


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def build_calendar(
    hours: dict[int, WorkingHours],
    exceptions: Iterable[ScheduleException],
    start: date,
    end: date,
) -> list[CalendarBlock]:
    """Working-hours background first, exception overlays after."""
    background = working_hours_blocks(hours, start, end)
    overlay = sorted(exception_blocks(exceptions, start, end), key=lambda b: b.start)
    return background + overlay


def is_open(
    hours: dict[int, WorkingHours],
    exceptions: Iterable[ScheduleException],
    day: date,
    start: time,
    end: time,
) -> bool:
    """
    True if the business is open for the whole of [start, end) on `day`:
    the interval lies inside that weekday's working hours and no
    exception occurrence overlaps it.
    """
    if start >= end:
        return False

    entry = hours.get(day_of_week(day))
    if entry is None or not entry.isOpen:
        return False
    if start < entry.open_time or end > entry.close_time:
        return False

    wanted_start = datetime.combine(day, start)
    wanted_end = datetime.combine(day, end)
    for block in exception_blocks(exceptions, day, day + timedelta(days=1)):
        if overlaps(block.start, block.end, wanted_start, wanted_end):
            return False
    return True
