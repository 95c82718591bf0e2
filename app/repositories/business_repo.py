# app/repositories/business_repo.py
import uuid

from sqlmodel import Session, SQLModel, select

from app.models.business import (
    BusinessProfile,
    JobSeekerInfo,
    MobileServiceInfo,
    ShopSalonInfo,
)

# Category -> satellite table class
CATEGORY_TABLES: dict[str, type[SQLModel]] = {
    "salon_owner": ShopSalonInfo,
    "mobile_service": MobileServiceInfo,
    "job_seeker": JobSeekerInfo,
}

# Categories whose satellite table carries a `business_hours` column
HOURS_TABLES: dict[str, type[SQLModel]] = {
    "salon_owner": ShopSalonInfo,
    "mobile_service": MobileServiceInfo,
}


class BusinessRepository:
    """
    Data access layer for business_info and its category tables.

    Commits are left to the caller when several rows are written
    together (onboarding upsert); single-row helpers commit themselves.
    """

    # ----- business_info -----

    def get_by_user_id(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> BusinessProfile | None:
        stmt = select(BusinessProfile).where(BusinessProfile.user_id == user_id)
        return session.exec(stmt).first()

    def save_profile(self, session: Session, profile: BusinessProfile) -> BusinessProfile:
        """Stage an insert/update and assign the PK without committing."""
        session.add(profile)
        session.flush()
        session.refresh(profile)
        return profile

    # ----- category tables -----

    def get_category_info(
        self,
        session: Session,
        category: str,
        business_info_id: uuid.UUID,
    ) -> SQLModel | None:
        model = CATEGORY_TABLES.get(category)
        if model is None:
            return None
        stmt = select(model).where(model.business_info_id == business_info_id)
        return session.exec(stmt).first()

    def save_category_info(self, session: Session, info: SQLModel) -> SQLModel:
        session.add(info)
        session.flush()
        return info

    def get_business_hours(
        self,
        session: Session,
        category: str,
        business_info_id: uuid.UUID,
    ) -> list[dict] | None:
        """
        Return the stored weekly hours, [] when the category row is missing,
        or None when the category has no hours concept.
        """
        if category not in HOURS_TABLES:
            return None
        info = self.get_category_info(session, category, business_info_id)
        if info is None:
            return []
        return list(info.business_hours or [])

    def set_business_hours(
        self,
        session: Session,
        category: str,
        business_info_id: uuid.UUID,
        hours: list[dict],
    ) -> None:
        """
        Replace the weekly hours array wholesale, creating the category row
        if onboarding never created one.
        """
        model = HOURS_TABLES[category]
        info = self.get_category_info(session, category, business_info_id)
        if info is None:
            info = model(business_info_id=business_info_id)
        info.business_hours = hours
        session.add(info)
        session.commit()

    def commit(self, session: Session) -> None:
        session.commit()
