# app/schemas/appointment.py
import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

AppointmentStatus = Literal["pending", "confirmed", "completed", "cancelled"]


class _AppointmentFields(SQLModel):
    """
    Shared, all-optional appointment fields.

    Required fields are checked by the service so that a missing one
    yields "Missing required fields: ..." rather than a payload error.

    Unknown keys (business_info_id, created_at, ...) are dropped: the
    tenant scope always comes from the resolved business context.
    """

    model_config = ConfigDict(extra="ignore")

    client_name: str | None = Field(default=None, max_length=200)
    client_phone: str | None = None
    service: str | None = None
    price: float | None = Field(default=None, ge=0)
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: AppointmentStatus | None = None
    notes: str | None = None

    @field_validator("client_name", "client_phone", "service", "notes")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None

    @field_validator("price", "start_time", "end_time", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def as_business_local(cls, v: datetime | None) -> datetime | None:
        # Times are naive business-local; an offset is dropped, not converted.
        if v is None:
            return v
        return v.replace(tzinfo=None)


class AppointmentCreate(_AppointmentFields):
    """
    POST /business/appointments payload.

    Required (checked in service): client_name, service, start_time, end_time.
    status defaults to 'confirmed'.
    """


class AppointmentUpdate(_AppointmentFields):
    """
    PUT /business/appointments payload: `id` plus any subset of fields.
    Only keys present in the request body are applied.
    """

    id: uuid.UUID | None = None


class AppointmentRead(SQLModel):
    id: uuid.UUID
    business_info_id: uuid.UUID
    client_name: str
    client_phone: str | None
    service: str
    price: float | None
    start_time: datetime
    end_time: datetime
    status: AppointmentStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime


class AppointmentResponse(SQLModel):
    appointment: AppointmentRead


class AppointmentListResponse(SQLModel):
    appointments: list[AppointmentRead]


class SuccessResponse(SQLModel):
    success: bool = True
