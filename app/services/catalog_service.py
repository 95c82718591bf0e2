# app/services/catalog_service.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session

from app.core.auth import BusinessContext
from app.core.errors import NotFoundError, ValidationError, datastore_errors
from app.models.service import BusinessService
from app.repositories.service_repo import ServiceRepository
from app.schemas.service import ServiceCreate, ServiceUpdate

DEFAULT_DURATION_MINUTES = 30
DEFAULT_CURRENCY = "MAD"


class CatalogService:
    """
    Business logic for the service catalog (haircut, beard trim, ...).

    Catalog entries are not referenced by appointments; they only feed
    the booking UI.
    """

    def __init__(self, repo: ServiceRepository):
        self.repo = repo

    def list_services(
        self,
        session: Session,
        ctx: BusinessContext | None,
    ) -> dict[str, Any]:
        if ctx is None:
            return {"services": [], "specialty": None}
        return {
            "services": self.repo.list_for_business(session, ctx.business_id),
            "specialty": ctx.professional_type,
        }

    def create_service(
        self,
        session: Session,
        ctx: BusinessContext,
        payload: ServiceCreate,
    ) -> BusinessService:
        if not payload.name or payload.price is None:
            raise ValidationError("name and price are required")

        service = BusinessService(
            business_info_id=ctx.business_id,
            name=payload.name,
            description=payload.description,
            duration_minutes=payload.duration_minutes or DEFAULT_DURATION_MINUTES,
            price=payload.price,
            currency=payload.currency or DEFAULT_CURRENCY,
            is_active=True if payload.is_active is None else payload.is_active,
        )
        with datastore_errors(session, "services POST", "Failed to create service"):
            return self.repo.create(session, service)

    def update_service(
        self,
        session: Session,
        ctx: BusinessContext,
        payload: ServiceUpdate,
    ) -> BusinessService:
        """
        Partial update; only keys present in the body are applied.
        """
        if payload.id is None:
            raise ValidationError("id is required")

        service = self.repo.get_for_business(session, ctx.business_id, payload.id)
        if service is None:
            raise NotFoundError("Service not found")

        changes = payload.model_dump(exclude_unset=True, exclude={"id"})
        for field in ("name", "price", "duration_minutes", "currency", "is_active"):
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be empty")

        for field, value in changes.items():
            setattr(service, field, value)
        service.updated_at = datetime.now(timezone.utc)

        with datastore_errors(session, "services PUT", "Failed to update service"):
            return self.repo.update(session, service)

    def delete_service(
        self,
        session: Session,
        ctx: BusinessContext,
        service_id: uuid.UUID | None,
    ) -> None:
        if service_id is None:
            raise ValidationError("id is required")

        service = self.repo.get_for_business(session, ctx.business_id, service_id)
        if service is None:
            return

        with datastore_errors(session, "services DELETE", "Failed to delete service"):
            self.repo.delete(session, service)
