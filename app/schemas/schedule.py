# app/schemas/schedule.py
import uuid
import datetime as dt
from typing import Any, Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

ExceptionType = Literal["break", "lunch_break", "closure", "holiday", "vacation", "other"]

VALID_EXCEPTION_TYPES: tuple[str, ...] = (
    "break",
    "lunch_break",
    "closure",
    "holiday",
    "vacation",
    "other",
)


class ScheduleExceptionCreate(SQLModel):
    """
    POST /business/schedule payload (camelCase, as sent by the calendar).

    Full-day mode is implied when neither startTime nor endTime is given.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    type: str | None = None
    date: dt.date | None = None
    endDate: dt.date | None = None
    startTime: dt.time | None = None
    endTime: dt.time | None = None
    isFullDay: bool | None = None
    recurring: bool | None = None
    recurringDay: int | None = None
    notes: str | None = None

    @field_validator("title", "type", "notes")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None

    @field_validator("date", "endDate", "startTime", "endTime", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ScheduleExceptionRead(SQLModel):
    id: uuid.UUID
    business_info_id: uuid.UUID
    title: str
    type: ExceptionType
    date: dt.date
    end_date: dt.date | None
    start_time: dt.time | None
    end_time: dt.time | None
    is_full_day: bool
    recurring: bool
    recurring_day: int | None
    notes: str | None
    created_at: dt.datetime


class ScheduleRead(SQLModel):
    """GET /business/schedule response."""

    businessHours: list[dict[str, Any]]
    exceptions: list[ScheduleExceptionRead]
    category: str | None


class ScheduleExceptionCreated(SQLModel):
    success: bool = True
    exception: ScheduleExceptionRead


class CalendarBlock(SQLModel):
    """
    One renderable interval on the schedule calendar.

    kind:
      - working_hours : background block for an open weekday
      - exception     : overlay block for a schedule exception occurrence

    `end` is exclusive; full-day blocks run midnight to midnight.
    """

    id: str
    kind: Literal["working_hours", "exception"]
    title: str
    type: ExceptionType | None = None
    start: dt.datetime
    end: dt.datetime
    allDay: bool = False
    exceptionId: uuid.UUID | None = None


class CalendarResponse(SQLModel):
    start: dt.date
    end: dt.date
    blocks: list[CalendarBlock]


class AvailabilityResponse(SQLModel):
    date: dt.date
    start: dt.time
    end: dt.time
    open: bool
