# app/repositories/service_repo.py
import uuid

from sqlmodel import Session, select

from app.models.service import BusinessService


class ServiceRepository:
    """
    Data access layer for business_services (the service catalog).
    """

    def list_for_business(
        self,
        session: Session,
        business_info_id: uuid.UUID,
    ) -> list[BusinessService]:
        stmt = (
            select(BusinessService)
            .where(BusinessService.business_info_id == business_info_id)
            .order_by(BusinessService.created_at)
        )
        return session.exec(stmt).all()

    def get_for_business(
        self,
        session: Session,
        business_info_id: uuid.UUID,
        service_id: uuid.UUID,
    ) -> BusinessService | None:
        stmt = select(BusinessService).where(
            BusinessService.id == service_id,
            BusinessService.business_info_id == business_info_id,
        )
        return session.exec(stmt).first()

    def create(self, session: Session, service: BusinessService) -> BusinessService:
        session.add(service)
        session.commit()
        session.refresh(service)
        return service

    def update(self, session: Session, service: BusinessService) -> BusinessService:
        session.add(service)
        session.commit()
        session.refresh(service)
        return service

    def delete(self, session: Session, service: BusinessService) -> None:
        session.delete(service)
        session.commit()
