# app/schemas/service.py
import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Currency = Literal["MAD", "EUR", "USD", "GBP"]


class _ServiceFields(SQLModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, max_length=100)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, ge=1)
    price: float | None = Field(default=None, ge=0)
    currency: Currency | None = None
    is_active: bool | None = None

    @field_validator("name", "description")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None

    @field_validator("price", "duration_minutes", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ServiceCreate(_ServiceFields):
    """
    POST /business/services payload.

    Required (checked in service): name, price.
    Defaults: duration 30 min, currency MAD, active.
    """


class ServiceUpdate(_ServiceFields):
    """PUT /business/services payload: `id` plus any subset of fields."""

    id: uuid.UUID | None = None


class ServiceRead(SQLModel):
    id: uuid.UUID
    business_info_id: uuid.UUID
    name: str
    description: str | None
    duration_minutes: int
    price: float
    currency: Currency
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ServiceResponse(SQLModel):
    service: ServiceRead


class ServiceListResponse(SQLModel):
    services: list[ServiceRead]
    specialty: str | None = None
