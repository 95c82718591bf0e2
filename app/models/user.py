# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Application user mirrored from Clerk.

    Identity:
      - clerk_id: MUST match the Clerk user id (JWT "sub")
      - id: internal primary key used by every other table

    Role:
      - "business" | "user"
      - assigned exactly once; a missing row means "no role yet".

    Clerk owns credentials and sessions. We only mirror identity,
    email, and application role.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    clerk_id: str = Field(
        unique=True,
        index=True,
        description="Clerk user id (JWT sub)",
    )

    email: str | None = Field(
        default=None,
        description="Primary email reported by the client at sign-up",
    )

    role: str | None = Field(
        default=None,
        index=True,
        description="Application role: business | user",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
