# app/services/schedule_service.py
import logging
import uuid
from datetime import date, time, timedelta
from typing import Any

from sqlmodel import Session

from app.core.auth import BusinessContext
from app.core.errors import ValidationError, datastore_errors
from app.models.schedule import ScheduleException
from app.repositories.business_repo import HOURS_TABLES, BusinessRepository
from app.repositories.schedule_repo import ScheduleExceptionRepository
from app.schemas.business import WorkingHours
from app.schemas.schedule import (
    VALID_EXCEPTION_TYPES,
    CalendarBlock,
    ScheduleExceptionCreate,
)
from app.services.availability import (
    build_calendar,
    day_of_week,
    is_open,
    load_working_hours,
    parse_working_hours,
)

logger = logging.getLogger(__name__)

# Calendar window defaults: one week back, seven weeks ahead
CALENDAR_DAYS_BEFORE = 7
CALENDAR_WEEKS = 8
MAX_CALENDAR_DAYS = 366


class ScheduleService:
    """
    Working hours + schedule exceptions for a business.

    Responsibilities:
      - read / replace the weekly hours on the category table
      - validate and store exceptions (full-day vs timed, recurrence)
      - feed the availability model for calendar and open/closed queries
    """

    def __init__(
        self,
        business_repo: BusinessRepository,
        exception_repo: ScheduleExceptionRepository,
    ):
        self.business_repo = business_repo
        self.exception_repo = exception_repo

    # ----- Helpers -----

    def _load(
        self,
        session: Session,
        ctx: BusinessContext,
    ) -> tuple[dict[int, WorkingHours], list[ScheduleException]]:
        stored = self.business_repo.get_business_hours(session, ctx.category, ctx.business_id)
        exceptions = self.exception_repo.list_for_business(session, ctx.business_id)
        return load_working_hours(stored or []), exceptions

    # ----- Working hours -----

    def get_schedule(self, session: Session, ctx: BusinessContext) -> dict[str, Any]:
        """
        Weekly hours (empty for categories without hours) + all exceptions.
        """
        hours = self.business_repo.get_business_hours(session, ctx.category, ctx.business_id)
        exceptions = self.exception_repo.list_for_business(session, ctx.business_id)
        return {
            "businessHours": hours or [],
            "exceptions": exceptions,
            "category": ctx.category,
        }

    def update_working_hours(
        self,
        session: Session,
        ctx: BusinessContext,
        raw_hours: Any,
    ) -> None:
        """
        Replace the whole weekly table.

        Raises:
            ValidationError(400): not an array, invalid entries, or a
            category without working hours (job_seeker).
        """
        entries = parse_working_hours(raw_hours)

        if ctx.category not in HOURS_TABLES:
            raise ValidationError(
                "Cannot update hours for this category",
                category=ctx.category,
            )

        hours = [entry.model_dump() for entry in entries]
        with datastore_errors(session, "schedule PUT", "Failed to update"):
            self.business_repo.set_business_hours(
                session, ctx.category, ctx.business_id, hours
            )

    # ----- Exceptions -----

    def create_exception(
        self,
        session: Session,
        ctx: BusinessContext,
        payload: ScheduleExceptionCreate,
    ) -> ScheduleException:
        """
        Store a break / closure / holiday / vacation.

        Rules:
          - title, type, date are required; type must be a known type
          - full day when isFullDay is true or no time is given; then both
            times are cleared and endDate (>= date) may extend the range
          - otherwise both times are required and startTime < endTime;
            endDate is dropped
          - recurring exceptions repeat on recurringDay (0=Sunday), which
            defaults to the weekday of `date`
        """
        if not payload.title or not payload.type or payload.date is None:
            raise ValidationError("title, type, and date are required")

        if payload.type not in VALID_EXCEPTION_TYPES:
            raise ValidationError("Invalid type", validTypes=list(VALID_EXCEPTION_TYPES))

        full_day = payload.isFullDay is True or (
            payload.startTime is None and payload.endTime is None
        )

        start_time: time | None = None
        end_time: time | None = None
        end_date: date | None = None

        if full_day:
            end_date = payload.endDate
            if end_date is not None and end_date < payload.date:
                raise ValidationError("endDate cannot be before date")
        else:
            if payload.startTime is None or payload.endTime is None:
                raise ValidationError(
                    "startTime and endTime are both required for a timed exception"
                )
            if payload.startTime >= payload.endTime:
                raise ValidationError("startTime must be before endTime")
            start_time, end_time = payload.startTime, payload.endTime

        recurring = bool(payload.recurring)
        recurring_day: int | None = None
        if recurring:
            recurring_day = payload.recurringDay
            if recurring_day is None:
                recurring_day = day_of_week(payload.date)
            if not 0 <= recurring_day <= 6:
                raise ValidationError(
                    "recurringDay must be between 0 (Sunday) and 6 (Saturday)"
                )

        exception = ScheduleException(
            business_info_id=ctx.business_id,
            title=payload.title,
            type=payload.type,
            date=payload.date,
            end_date=end_date,
            start_time=start_time,
            end_time=end_time,
            is_full_day=full_day,
            recurring=recurring,
            recurring_day=recurring_day,
            notes=payload.notes,
        )

        with datastore_errors(session, "schedule POST", "Failed to create exception"):
            return self.exception_repo.create(session, exception)

    def delete_exception(
        self,
        session: Session,
        ctx: BusinessContext,
        exception_id: uuid.UUID | None,
    ) -> None:
        """
        Delete an exception of the business. Deleting an id that is
        already gone (or belongs to someone else) succeeds as a no-op.
        """
        if exception_id is None:
            raise ValidationError("Exception id is required")

        exception = self.exception_repo.get_for_business(session, ctx.business_id, exception_id)
        if exception is None:
            logger.info(f"[schedule DELETE] Exception {exception_id} already absent")
            return

        with datastore_errors(session, "schedule DELETE", "Failed to delete"):
            self.exception_repo.delete(session, exception)

    # ----- Availability -----

    def get_calendar(
        self,
        session: Session,
        ctx: BusinessContext,
        start: date | None,
        end: date | None,
        today: date | None = None,
    ) -> tuple[date, date, list[CalendarBlock]]:
        """
        Renderable blocks for [start, end).

        Defaults to the eight-week window shown by the schedule page:
        one week back from today, seven weeks ahead.
        """
        today = today or date.today()
        if start is None:
            start = today - timedelta(days=CALENDAR_DAYS_BEFORE)
        if end is None:
            end = start + timedelta(weeks=CALENDAR_WEEKS)

        if end < start:
            raise ValidationError("end must not be before start")
        if (end - start).days > MAX_CALENDAR_DAYS:
            raise ValidationError(f"Date range cannot exceed {MAX_CALENDAR_DAYS} days")

        hours, exceptions = self._load(session, ctx)
        return start, end, build_calendar(hours, exceptions, start, end)

    def check_availability(
        self,
        session: Session,
        ctx: BusinessContext,
        day: date,
        start: time,
        end: time,
    ) -> bool:
        if start >= end:
            raise ValidationError("start must be before end")

        hours, exceptions = self._load(session, ctx)
        return is_open(hours, exceptions, day, start, end)
