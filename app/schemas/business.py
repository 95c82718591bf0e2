# app/schemas/business.py
import uuid
from datetime import datetime, time
from typing import Any, Literal

from pydantic import ConfigDict, field_validator, model_validator
from sqlmodel import SQLModel, Field

BusinessCategory = Literal["salon_owner", "mobile_service", "job_seeker"]

VALID_CATEGORIES: tuple[str, ...] = ("salon_owner", "mobile_service", "job_seeker")

VALID_PROFESSIONAL_TYPES: tuple[str, ...] = (
    "barber",
    "hairdresser",
    "makeup",
    "nails",
    "massage",
    "other",
)


def _normalize_hhmm(v: Any) -> str | None:
    """
    Accept "HH:MM" or "HH:MM:SS" (Postgres `time` round-trips with seconds)
    and return "HH:MM".
    """
    if v is None or v == "":
        return None
    if isinstance(v, time):
        return v.strftime("%H:%M")
    if not isinstance(v, str):
        raise ValueError("time must be a HH:MM string")
    try:
        parsed = time.fromisoformat(v.strip())
    except ValueError:
        raise ValueError(f"invalid time '{v}', expected HH:MM")
    return parsed.strftime("%H:%M")


class WorkingHours(SQLModel):
    """
    One weekday of the recurring weekly schedule.

    Field names are camelCase because the row is stored verbatim in the
    `business_hours` JSON column read by the calendar frontend.

    dayOfWeek: 0=Sunday .. 6=Saturday
    """

    model_config = ConfigDict(extra="ignore")

    dayOfWeek: int = Field(ge=0, le=6)
    isOpen: bool = False
    openTime: str | None = None
    closeTime: str | None = None

    @field_validator("openTime", "closeTime", mode="before")
    @classmethod
    def normalize_time(cls, v: Any) -> str | None:
        return _normalize_hhmm(v)

    @model_validator(mode="after")
    def check_open_range(self) -> "WorkingHours":
        if self.isOpen:
            if not self.openTime or not self.closeTime:
                raise ValueError("openTime and closeTime are required when isOpen is true")
            # zero-padded HH:MM strings compare chronologically
            if self.openTime >= self.closeTime:
                raise ValueError("openTime must be before closeTime")
        return self

    @property
    def open_time(self) -> time | None:
        return time.fromisoformat(self.openTime) if self.openTime else None

    @property
    def close_time(self) -> time | None:
        return time.fromisoformat(self.closeTime) if self.closeTime else None


class WorkingHoursUpdate(SQLModel):
    """
    PUT /business/schedule payload.

    Typed as Any so that a non-array value gets the dedicated
    "businessHours must be an array" answer.
    """

    businessHours: Any = None


class OnboardingPayload(SQLModel):
    """
    Business onboarding wizard payload (camelCase, as sent by the frontend).

    Category-specific fields are ignored for other categories.
    """

    model_config = ConfigDict(extra="ignore")

    professionalType: str | None = None
    businessCategory: str | None = None
    businessHours: Any = None

    # salon_owner
    shopName: str | None = Field(default=None, max_length=200)
    address: str | None = None

    # mobile_service
    serviceArea: str | None = None

    # job_seeker
    yearsOfExperience: int | None = Field(default=None, ge=0)
    hasCertificate: bool | None = None

    completeOnboarding: bool = False

    @field_validator("professionalType", "businessCategory")
    @classmethod
    def normalize_choice(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip() or None


class BusinessProfileRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    business_category: BusinessCategory | None
    professional_type: str
    onboarding_completed: bool
    created_at: datetime
    updated_at: datetime


class OnboardingStatus(SQLModel):
    onboardingCompleted: bool
    businessInfo: BusinessProfileRead | None
    businessCategory: BusinessCategory | None
    professionalType: str | None
    businessHours: list[dict[str, Any]]


class OnboardingSaved(SQLModel):
    success: bool = True
    businessInfo: BusinessProfileRead
