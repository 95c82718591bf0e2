# app/services/appointment_service.py
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session

from app.core.auth import BusinessContext
from app.core.errors import NotFoundError, ValidationError, datastore_errors
from app.models.appointment import Appointment
from app.repositories.appointment_repo import AppointmentRepository
from app.schemas.appointment import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("client_name", "service", "start_time", "end_time")

DEFAULT_STATUS = "confirmed"

# Status state machine. completed / cancelled are terminal.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"confirmed", "completed", "cancelled"}),
    "confirmed": frozenset({"completed", "cancelled"}),
    "completed": frozenset(),
    "cancelled": frozenset(),
}

# Statuses whose start/end time is frozen, with the client-facing reason.
TIME_LOCKED_STATUSES: dict[str, str] = {
    "confirmed": "Confirmed appointments cannot be moved/resized",
    "completed": "Completed and cancelled appointments cannot be moved/resized",
    "cancelled": "Completed and cancelled appointments cannot be moved/resized",
}


class AppointmentService:
    """
    Business logic for the appointment calendar.

    Responsibilities:
      - required-field validation on create
      - status lifecycle (pending -> confirmed -> completed/cancelled)
      - time-change lock for confirmed and terminal appointments
      - tenant scoping: every lookup goes through the resolved business id,
        never through ids supplied in the payload
    """

    def __init__(self, repo: AppointmentRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _check_time_range(start: datetime, end: datetime) -> None:
        if start >= end:
            raise ValidationError("start_time must be before end_time")

    @staticmethod
    def _check_transition(current: str, new: str) -> None:
        if new == current:
            return
        allowed = ALLOWED_TRANSITIONS.get(current, frozenset())
        if new not in allowed:
            raise ValidationError(
                f"Cannot change status from {current} to {new}",
                status=current,
                allowedStatuses=sorted(allowed),
            )

    def _validate_changes(self, appointment: Appointment, changes: dict[str, Any]) -> None:
        """
        Check a partial update against the stored row before anything is
        written. Raises ValidationError on the first violated rule.
        """
        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be empty")

        if "status" in changes:
            if changes["status"] is None:
                raise ValidationError("status cannot be empty")
            self._check_transition(appointment.status, changes["status"])

        new_start = changes.get("start_time", appointment.start_time)
        new_end = changes.get("end_time", appointment.end_time)
        time_changed = new_start != appointment.start_time or new_end != appointment.end_time

        if time_changed:
            # The lock looks at the stored status, not the requested one.
            reason = TIME_LOCKED_STATUSES.get(appointment.status)
            if reason:
                raise ValidationError(reason, status=appointment.status)
            self._check_time_range(new_start, new_end)

    def _get_scoped(
        self,
        session: Session,
        ctx: BusinessContext,
        appointment_id: uuid.UUID,
    ) -> Appointment:
        appointment = self.repo.get_for_business(session, ctx.business_id, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment

    # ----- Operations -----

    def list_appointments(
        self,
        session: Session,
        ctx: BusinessContext | None,
    ) -> list[Appointment]:
        """
        All appointments of the business, ascending by start_time.

        A business user without a profile yet sees an empty calendar.
        """
        if ctx is None:
            return []
        with datastore_errors(session, "appointments GET", "Failed to fetch appointments"):
            return self.repo.list_for_business(session, ctx.business_id)

    def create_appointment(
        self,
        session: Session,
        ctx: BusinessContext,
        payload: AppointmentCreate,
    ) -> Appointment:
        missing = [field for field in REQUIRED_FIELDS if getattr(payload, field) is None]
        if missing:
            raise ValidationError(
                "Missing required fields: " + ", ".join(REQUIRED_FIELDS),
                missing=missing,
            )

        self._check_time_range(payload.start_time, payload.end_time)

        appointment = Appointment(
            business_info_id=ctx.business_id,
            client_name=payload.client_name,
            client_phone=payload.client_phone,
            service=payload.service,
            price=payload.price,
            start_time=payload.start_time,
            end_time=payload.end_time,
            status=payload.status or DEFAULT_STATUS,
            notes=payload.notes,
        )

        with datastore_errors(session, "appointments POST", "Failed to create appointment"):
            created = self.repo.create(session, appointment)

        logger.info(f"[appointments POST] Created {created.id} for business {ctx.business_id}")
        return created

    def update_appointment(
        self,
        session: Session,
        ctx: BusinessContext,
        payload: AppointmentUpdate,
    ) -> Appointment:
        """
        Partial update of an appointment owned by the business.

        - Only keys present in the body are applied.
        - A foreign or unknown id is reported as not found.
        - Validation happens before any attribute is touched, so a
          rejected request leaves the row unchanged.
        """
        if payload.id is None:
            raise ValidationError("Missing appointment id")

        appointment = self._get_scoped(session, ctx, payload.id)
        changes = payload.model_dump(exclude_unset=True, exclude={"id"})

        self._validate_changes(appointment, changes)

        for field, value in changes.items():
            setattr(appointment, field, value)
        appointment.updated_at = datetime.now(timezone.utc)

        with datastore_errors(session, "appointments PUT", "Failed to update appointment"):
            return self.repo.update(session, appointment)

    def delete_appointment(
        self,
        session: Session,
        ctx: BusinessContext,
        appointment_id: uuid.UUID | None,
    ) -> None:
        """
        Delete an appointment owned by the business.

        Unknown or foreign ids are a no-op (the scoped delete matches zero rows).
        """
        if appointment_id is None:
            raise ValidationError("Missing appointment id")

        appointment = self.repo.get_for_business(session, ctx.business_id, appointment_id)
        if appointment is None:
            return

        with datastore_errors(session, "appointments DELETE", "Failed to delete appointment"):
            self.repo.delete(session, appointment)
