# app/models/appointment.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


class Appointment(SQLModel, table=True):
    """
    Client booking on a business calendar.

    `service` is free text, not a foreign key to business_services.

    start_time / end_time are naive business-local timestamps.
    """

    __tablename__ = "appointments"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    business_info_id: uuid.UUID = Field(
        foreign_key="business_info.id",
        index=True,
    )

    client_name: str = Field(max_length=200)
    client_phone: str | None = None

    service: str = Field(description="Service label as typed by the business")

    price: float | None = Field(default=None, ge=0)

    start_time: datetime = Field(
        sa_column=Column(DateTime(timezone=False), index=True, nullable=False),
    )
    end_time: datetime = Field(
        sa_column=Column(DateTime(timezone=False), nullable=False),
    )

    # pending | confirmed | completed | cancelled
    status: str = Field(
        default="confirmed",
        index=True,
        description="Appointment status lifecycle",
    )

    notes: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
