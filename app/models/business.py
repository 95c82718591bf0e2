# app/models/business.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class BusinessProfile(SQLModel, table=True):
    """
    Registered service provider, one per user with role='business'.

    The category decides which satellite table carries the
    category-specific fields:
      - salon_owner    -> shop_salon_info
      - mobile_service -> mobile_service_info
      - job_seeker     -> job_seeker_info
    """

    __tablename__ = "business_info"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        unique=True,
        index=True,
    )

    # salon_owner | mobile_service | job_seeker
    business_category: str | None = Field(default=None, index=True)

    # barber | hairdresser | makeup | nails | massage | other
    professional_type: str = Field(description="Professional specialty")

    onboarding_completed: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )


class ShopSalonInfo(SQLModel, table=True):
    """
    Category data for salon / shop owners (1:1 with business_info).

    `business_hours` is the 7-entry weekly table, replaced wholesale.
    """

    __tablename__ = "shop_salon_info"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    business_info_id: uuid.UUID = Field(
        foreign_key="business_info.id",
        unique=True,
        index=True,
    )

    shop_name: str | None = None
    address: str | None = None

    business_hours: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )


class MobileServiceInfo(SQLModel, table=True):
    """
    Category data for mobile professionals (1:1 with business_info).
    """

    __tablename__ = "mobile_service_info"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    business_info_id: uuid.UUID = Field(
        foreign_key="business_info.id",
        unique=True,
        index=True,
    )

    service_area: str | None = Field(
        default=None,
        description="City / zone covered by the professional",
    )

    business_hours: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )


class JobSeekerInfo(SQLModel, table=True):
    """
    Category data for professionals looking for a chair.
    No physical or mobile presence => no working hours.
    """

    __tablename__ = "job_seeker_info"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    business_info_id: uuid.UUID = Field(
        foreign_key="business_info.id",
        unique=True,
        index=True,
    )

    years_of_experience: int | None = Field(default=None, ge=0)
    has_certificate: bool | None = None
