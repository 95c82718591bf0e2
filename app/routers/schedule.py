# app/routers/schedule.py
import uuid
from datetime import date, time

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import BusinessContext, require_business_context
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.schedule_repo import ScheduleExceptionRepository
from app.schemas.appointment import SuccessResponse
from app.schemas.business import WorkingHoursUpdate
from app.schemas.schedule import (
    AvailabilityResponse,
    CalendarResponse,
    ScheduleExceptionCreate,
    ScheduleExceptionCreated,
    ScheduleRead,
)
from app.services.schedule_service import ScheduleService

router = APIRouter(prefix="/business/schedule", tags=["Schedule"])

business_repo = BusinessRepository()
exception_repo = ScheduleExceptionRepository()
service = ScheduleService(business_repo, exception_repo)


# -------- Working hours + exceptions --------


@router.get("", response_model=ScheduleRead)
def get_schedule(
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Weekly working hours, all schedule exceptions and the business category.
    """
    return service.get_schedule(session, ctx)


@router.put("", response_model=SuccessResponse)
def update_working_hours(
    payload: WorkingHoursUpdate,
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Replace the 7-day working hours table.

    - Rejected for categories without working hours (job_seeker).
    """
    service.update_working_hours(session, ctx, payload.businessHours)
    return {"success": True}


@router.post("", response_model=ScheduleExceptionCreated)
def create_exception(
    payload: ScheduleExceptionCreate,
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Add a break, closure, holiday, vacation, ...

    - No time given => full-day exception (endDate allowed).
    """
    exception = service.create_exception(session, ctx, payload)
    return {"success": True, "exception": exception}


@router.delete("", response_model=SuccessResponse)
def delete_exception(
    exception_id: uuid.UUID | None = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Remove a schedule exception. Idempotent.
    """
    service.delete_exception(session, ctx, exception_id)
    return {"success": True}


# -------- Availability --------


@router.get("/calendar", response_model=CalendarResponse)
def get_calendar(
    start: date | None = None,
    end: date | None = None,
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Calendar blocks for the half-open range [start, end).

    Query params (optional):
      - start: defaults to one week before today
      - end: defaults to eight weeks after start
    """
    start, end, blocks = service.get_calendar(session, ctx, start, end)
    return {"start": start, "end": end, "blocks": blocks}


@router.get("/availability", response_model=AvailabilityResponse)
def check_availability(
    day: date = Query(alias="date"),
    start: time = Query(),
    end: time = Query(),
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Is the business open for the whole interval [start, end) on `date`?
    """
    is_open = service.check_availability(session, ctx, day, start, end)
    return {"date": day, "start": start, "end": end, "open": is_open}
