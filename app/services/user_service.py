# app/services/user_service.py
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.errors import AuthorizationError, ValidationError, datastore_errors
from app.models.user import User
from app.repositories.business_repo import BusinessRepository
from app.repositories.user_repo import UserRepository
from app.schemas.user import VALID_ROLES, RoleAssign


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - one-time role assignment right after Clerk sign-up
      - role lookup for frontend routing
    """

    def __init__(self, repo: UserRepository, business_repo: BusinessRepository):
        self.repo = repo
        self.business_repo = business_repo

    def get_role(self, session: Session, clerk_id: str) -> dict[str, Any]:
        """
        Current role of the caller.

        A user without a row simply has no role yet (not an error).
        Only business users have an onboarding wizard to complete.
        """
        user = self.repo.get_by_clerk_id(session, clerk_id)
        if user is None:
            return {"role": None, "hasRole": False, "onboardingCompleted": False}

        onboarding_completed = True
        if user.role == "business":
            profile = self.business_repo.get_by_user_id(session, user.id)
            onboarding_completed = bool(profile and profile.onboarding_completed)

        return {
            "role": user.role,
            "hasRole": user.role is not None,
            "userId": user.id,
            "onboardingCompleted": onboarding_completed,
        }

    def assign_role(
        self,
        session: Session,
        clerk_id: str,
        payload: RoleAssign,
    ) -> User:
        """
        Create the user row with its role.

        Rules:
          - role must be one of VALID_ROLES
          - a role is assigned exactly once; switching later is refused

        Raises:
            ValidationError(400): invalid role.
            AuthorizationError(403): role already assigned.
        """
        if payload.role not in VALID_ROLES:
            raise ValidationError(
                'Invalid role. Must be "business" or "user"',
                validRoles=list(VALID_ROLES),
            )

        existing = self.repo.get_by_clerk_id(session, clerk_id)
        if existing is not None:
            raise AuthorizationError(
                "Role already assigned. Role cannot be changed.",
                role=existing.role,
            )

        user = User(clerk_id=clerk_id, email=payload.email, role=payload.role)
        with datastore_errors(session, "set-role", "Failed to create user"):
            try:
                return self.repo.create(session, user)
            except IntegrityError:
                # A concurrent first request inserted the same clerk_id.
                session.rollback()
                existing = self.repo.get_by_clerk_id(session, clerk_id)

        raise AuthorizationError(
            "Role already assigned. Role cannot be changed.",
            role=existing.role if existing else None,
        )
