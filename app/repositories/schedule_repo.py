# app/repositories/schedule_repo.py
import uuid

from sqlmodel import Session, select

from app.models.schedule import ScheduleException


class ScheduleExceptionRepository:
    """
    Data access layer for schedule_exceptions.

    - Pure DB operations, always scoped by business_info_id.
    - No update: exceptions are replaced via delete + create.
    """

    def list_for_business(
        self,
        session: Session,
        business_info_id: uuid.UUID,
    ) -> list[ScheduleException]:
        stmt = (
            select(ScheduleException)
            .where(ScheduleException.business_info_id == business_info_id)
            .order_by(ScheduleException.date, ScheduleException.start_time)
        )
        return session.exec(stmt).all()

    def get_for_business(
        self,
        session: Session,
        business_info_id: uuid.UUID,
        exception_id: uuid.UUID,
    ) -> ScheduleException | None:
        stmt = select(ScheduleException).where(
            ScheduleException.id == exception_id,
            ScheduleException.business_info_id == business_info_id,
        )
        return session.exec(stmt).first()

    def create(
        self,
        session: Session,
        exception: ScheduleException,
    ) -> ScheduleException:
        session.add(exception)
        session.commit()
        session.refresh(exception)
        return exception

    def delete(self, session: Session, exception: ScheduleException) -> None:
        session.delete(exception)
        session.commit()
