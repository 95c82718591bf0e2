# app/schemas/user.py
import uuid
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel

# App-level roles. "no role yet" = no users row.
Role = Literal["business", "user"]

VALID_ROLES: tuple[str, ...] = ("business", "user")


class RoleAssign(SQLModel):
    """
    Payload for the one-time role choice made right after Clerk sign-up.

    `role` stays a plain string so the service can answer with the
    list of valid roles instead of a generic payload error.
    """

    model_config = ConfigDict(extra="forbid")

    role: str | None = None
    email: EmailStr | None = None

    @field_validator("role")
    @classmethod
    def normalize_role(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip().lower() or None


class RoleRead(SQLModel):
    """Current role of the caller; role=None until assigned."""

    role: Role | None
    hasRole: bool
    userId: uuid.UUID | None = None
    onboardingCompleted: bool = False


class RoleAssigned(SQLModel):
    success: bool = True
    role: Role
    userId: uuid.UUID
