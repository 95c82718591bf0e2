# app/models/service.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class BusinessService(SQLModel, table=True):
    """
    Catalog entry offered by a business (haircut, beard trim, ...).

    is_active=False hides the service from booking without deleting it.
    """

    __tablename__ = "business_services"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    business_info_id: uuid.UUID = Field(
        foreign_key="business_info.id",
        index=True,
    )

    name: str = Field(max_length=100, index=True)

    description: str | None = None

    duration_minutes: int = Field(default=30, ge=1)

    price: float = Field(ge=0)

    currency: str = Field(default="MAD", max_length=3)

    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
