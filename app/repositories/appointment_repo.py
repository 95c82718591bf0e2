# app/repositories/appointment_repo.py
import uuid

from sqlmodel import Session, select

from app.models.appointment import Appointment


class AppointmentRepository:
    """
    Data access layer for appointments.

    Every lookup is scoped by business_info_id; callers never get a row
    that belongs to another business.
    """

    def list_for_business(
        self,
        session: Session,
        business_info_id: uuid.UUID,
    ) -> list[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.business_info_id == business_info_id)
            .order_by(Appointment.start_time, Appointment.created_at)
        )
        return session.exec(stmt).all()

    def get_for_business(
        self,
        session: Session,
        business_info_id: uuid.UUID,
        appointment_id: uuid.UUID,
    ) -> Appointment | None:
        stmt = select(Appointment).where(
            Appointment.id == appointment_id,
            Appointment.business_info_id == business_info_id,
        )
        return session.exec(stmt).first()

    def create(self, session: Session, appointment: Appointment) -> Appointment:
        session.add(appointment)
        session.commit()
        session.refresh(appointment)
        return appointment

    def update(self, session: Session, appointment: Appointment) -> Appointment:
        session.add(appointment)
        session.commit()
        session.refresh(appointment)
        return appointment

    def delete(self, session: Session, appointment: Appointment) -> None:
        session.delete(appointment)
        session.commit()
