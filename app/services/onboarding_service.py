# app/services/onboarding_service.py
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session

from app.core.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
    datastore_errors,
)
from app.models.business import BusinessProfile
from app.models.user import User
from app.repositories.business_repo import (
    CATEGORY_TABLES,
    HOURS_TABLES,
    BusinessRepository,
)
from app.repositories.user_repo import UserRepository
from app.schemas.business import (
    VALID_CATEGORIES,
    VALID_PROFESSIONAL_TYPES,
    OnboardingPayload,
)
from app.services.availability import DEFAULT_WORKING_HOURS, parse_working_hours

# Payload key -> column, per category table
CATEGORY_FIELDS: dict[str, dict[str, str]] = {
    "salon_owner": {"shopName": "shop_name", "address": "address"},
    "mobile_service": {"serviceArea": "service_area"},
    "job_seeker": {
        "yearsOfExperience": "years_of_experience",
        "hasCertificate": "has_certificate",
    },
}


class OnboardingService:
    """
    Business onboarding wizard.

    Responsibilities:
      - upsert business_info keyed on the user id
      - upsert the 1:1 category row (salon / mobile / job seeker)
      - seed default working hours for categories that have them
    """

    def __init__(self, user_repo: UserRepository, business_repo: BusinessRepository):
        self.user_repo = user_repo
        self.business_repo = business_repo

    def _get_business_user(self, session: Session, clerk_id: str) -> User:
        user = self.user_repo.get_by_clerk_id(session, clerk_id)
        if user is None:
            raise NotFoundError("User not found")
        if user.role != "business":
            raise AuthorizationError("Not a business user", role=user.role)
        return user

    def get_status(self, session: Session, clerk_id: str) -> dict[str, Any]:
        user = self._get_business_user(session, clerk_id)
        profile = self.business_repo.get_by_user_id(session, user.id)

        hours: list[dict[str, Any]] = []
        if profile is not None and profile.business_category:
            hours = self.business_repo.get_business_hours(
                session, profile.business_category, profile.id
            ) or []

        return {
            "onboardingCompleted": bool(profile and profile.onboarding_completed),
            "businessInfo": profile,
            "businessCategory": profile.business_category if profile else None,
            "professionalType": profile.professional_type if profile else None,
            "businessHours": hours,
        }

    def save(
        self,
        session: Session,
        clerk_id: str,
        payload: OnboardingPayload,
    ) -> BusinessProfile:
        """
        Save one wizard step (or the whole wizard).

        - professionalType is required on every call.
        - businessCategory, when omitted, keeps the stored one.
        - completeOnboarding only ever flips the flag on.
        """
        if not payload.professionalType:
            raise ValidationError("Professional type is required")
        if payload.professionalType not in VALID_PROFESSIONAL_TYPES:
            raise ValidationError(
                "Invalid professional type",
                validTypes=list(VALID_PROFESSIONAL_TYPES),
            )
        if payload.businessCategory and payload.businessCategory not in VALID_CATEGORIES:
            raise ValidationError(
                "Invalid business category",
                validCategories=list(VALID_CATEGORIES),
            )

        user = self._get_business_user(session, clerk_id)
        profile = self.business_repo.get_by_user_id(session, user.id)

        category = payload.businessCategory or (profile.business_category if profile else None)

        hours: list[dict[str, Any]] | None = None
        if payload.businessHours is not None:
            if category not in HOURS_TABLES:
                raise ValidationError(
                    "Cannot set business hours for this category",
                    category=category,
                )
            hours = [entry.model_dump() for entry in parse_working_hours(payload.businessHours)]

        if profile is None:
            profile = BusinessProfile(
                user_id=user.id,
                professional_type=payload.professionalType,
            )
        profile.professional_type = payload.professionalType
        profile.business_category = category
        profile.onboarding_completed = profile.onboarding_completed or payload.completeOnboarding
        profile.updated_at = datetime.now(timezone.utc)

        with datastore_errors(session, "onboarding POST", "Failed to save business info"):
            profile = self.business_repo.save_profile(session, profile)
            if category:
                self._save_category_info(session, profile, category, payload, hours)
            self.business_repo.commit(session)
            session.refresh(profile)

        return profile

    def _save_category_info(
        self,
        session: Session,
        profile: BusinessProfile,
        category: str,
        payload: OnboardingPayload,
        hours: list[dict[str, Any]] | None,
    ) -> None:
        info = self.business_repo.get_category_info(session, category, profile.id)
        if info is None:
            info = CATEGORY_TABLES[category](business_info_id=profile.id)

        for key, column in CATEGORY_FIELDS[category].items():
            value = getattr(payload, key)
            if value is not None:
                setattr(info, column, value)

        if category in HOURS_TABLES:
            if hours is not None:
                info.business_hours = hours
            elif not info.business_hours:
                info.business_hours = [dict(row) for row in DEFAULT_WORKING_HOURS]

        self.business_repo.save_category_info(session, info)
