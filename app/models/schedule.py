# app/models/schedule.py
import uuid
import datetime as dt

from sqlmodel import SQLModel, Field


class ScheduleException(SQLModel, table=True):
    """
    Override layered on top of the weekly working hours
    (break, closure, holiday, vacation, ...).

    Exactly one mode holds for every row:
      - full day : is_full_day=True,  start_time=end_time=None
      - timed    : is_full_day=False, start_time < end_time

    end_date only applies to full-day exceptions (multi-day closures).
    recurring_day uses 0=Sunday .. 6=Saturday.
    """

    __tablename__ = "schedule_exceptions"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    business_info_id: uuid.UUID = Field(
        foreign_key="business_info.id",
        index=True,
    )

    title: str = Field(max_length=200)

    # break | lunch_break | closure | holiday | vacation | other
    type: str = Field(index=True)

    date: dt.date = Field(index=True, description="Anchor date")
    end_date: dt.date | None = Field(
        default=None,
        description="Inclusive last day of a multi-day full-day exception",
    )

    start_time: dt.time | None = None
    end_time: dt.time | None = None
    is_full_day: bool = Field(default=True)

    recurring: bool = Field(default=False)
    recurring_day: int | None = Field(default=None, ge=0, le=6)

    notes: str | None = None

    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        description="Creation timestamp (UTC)",
    )
