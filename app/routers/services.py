# app/routers/services.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import (
    BusinessContext,
    optional_business_context,
    require_business_context,
)
from app.database import get_session
from app.repositories.service_repo import ServiceRepository
from app.schemas.appointment import SuccessResponse
from app.schemas.service import (
    ServiceCreate,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
)
from app.services.catalog_service import CatalogService

router = APIRouter(prefix="/business/services", tags=["Services"])

repo = ServiceRepository()
service = CatalogService(repo)


@router.get("", response_model=ServiceListResponse)
def list_services(
    session: Session = Depends(get_session),
    ctx: BusinessContext | None = Depends(optional_business_context),
):
    """
    List the service catalog and the business specialty.
    """
    return service.list_services(session, ctx)


@router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_service(
    payload: ServiceCreate,
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    return {"service": service.create_service(session, ctx, payload)}


@router.put("", response_model=ServiceResponse)
def update_service(
    payload: ServiceUpdate,
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    return {"service": service.update_service(session, ctx, payload)}


@router.delete("", response_model=SuccessResponse)
def delete_service(
    service_id: uuid.UUID | None = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
    ctx: BusinessContext = Depends(require_business_context),
):
    service.delete_service(session, ctx, service_id)
    return {"success": True}
