# app/routers/onboarding.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import get_current_user_id
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.user_repo import UserRepository
from app.schemas.business import OnboardingPayload, OnboardingSaved, OnboardingStatus
from app.services.onboarding_service import OnboardingService

router = APIRouter(prefix="/business/onboarding", tags=["Onboarding"])

service = OnboardingService(UserRepository(), BusinessRepository())


@router.get("", response_model=OnboardingStatus)
def get_onboarding(
    session: Session = Depends(get_session),
    clerk_id: str = Depends(get_current_user_id),
):
    """
    Onboarding progress and saved data of the business user.

    Auth:
      - Requires role='business' (403 otherwise, 404 without a user row).
    """
    return service.get_status(session, clerk_id)


@router.post("", response_model=OnboardingSaved)
def save_onboarding(
    payload: OnboardingPayload,
    session: Session = Depends(get_session),
    clerk_id: str = Depends(get_current_user_id),
):
    """
    Upsert the business profile and its category data.
    """
    profile = service.save(session, clerk_id, payload)
    return {"success": True, "businessInfo": profile}
