# app/routers/appointments.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import (
    BusinessContext,
    optional_business_context,
    require_business_context,
)
from app.database import get_session
from app.repositories.appointment_repo import AppointmentRepository
from app.schemas.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentUpdate,
    SuccessResponse,
)
from app.services.appointment_service import AppointmentService

router = APIRouter(prefix="/business/appointments", tags=["Appointments"])

repo = AppointmentRepository()
service = AppointmentService(repo)


@router.get("", response_model=AppointmentListResponse)
def list_appointments(
    session: Session = Depends(get_session),
    ctx: BusinessContext | None = Depends(optional_business_context),
):
    """
    List the business calendar, ascending by start_time.

    - A business user without a profile yet gets an empty list, not 404.
    """
    return {"appointments": service.list_appointments(session, ctx)}


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_appointment(
    payload: AppointmentCreate,
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Book a client. Status defaults to 'confirmed'.
    """
    return {"appointment": service.create_appointment(session, ctx, payload)}


@router.put("", response_model=AppointmentResponse)
def update_appointment(
    payload: AppointmentUpdate,
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Partial update (edit, status change, drag/resize reschedule).

    - Confirmed, completed and cancelled appointments cannot be moved.
    - completed / cancelled are final.
    """
    return {"appointment": service.update_appointment(session, ctx, payload)}


@router.delete("", response_model=SuccessResponse)
def delete_appointment(
    appointment_id: uuid.UUID | None = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    """
    Delete an appointment of the business (no-op for unknown ids).
    """
    service.delete_appointment(session, ctx, appointment_id)
    return {"success": True}
