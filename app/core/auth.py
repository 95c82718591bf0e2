# app/core/auth.py
import logging
import uuid
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from jose.exceptions import JOSEError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.errors import AuthenticationError, NotFoundError
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header does NOT raise,
#   the session cookie is tried first anyway.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()
business_repo = BusinessRepository()


class IdentityVerifier(Protocol):
    """Turns a raw token into a stable external user id (or None)."""

    def verify(self, token: str) -> str | None: ...


class ClerkTokenVerifier:
    """
    Verify Clerk session tokens (JWT) locally with the instance key.

    Verification:
      - signature (CLERK_JWT_KEY, CLERK_JWT_ALG)
      - expiration (exp) and not-before (nbf)
      - authorized party (azp), only when an allow-list is configured
      - audience is NOT verified (Clerk session tokens carry none)
    """

    def __init__(
        self,
        key: str,
        algorithm: str = "RS256",
        authorized_parties: list[str] | None = None,
    ):
        self.key = key
        self.algorithm = algorithm
        self.authorized_parties = authorized_parties or []

    def decode(self, token: str) -> dict[str, Any]:
        """
        Raises:
            JWTError: if the token is invalid, expired or from a foreign party.
        """
        claims = jwt.decode(
            token,
            self.key,
            algorithms=[self.algorithm],
            options={"verify_aud": False},
        )
        azp = claims.get("azp")
        if self.authorized_parties and azp not in self.authorized_parties:
            raise JWTError(f"Unauthorized party: {azp}")
        return claims

    def verify(self, token: str) -> str | None:
        try:
            claims = self.decode(token)
        except (JOSEError, ValueError) as exc:
            logger.info(f"[auth] Token verification failed: {exc}")
            return None
        return claims.get("sub") or None


@lru_cache
def _default_verifier() -> ClerkTokenVerifier:
    settings = get_settings()
    return ClerkTokenVerifier(
        key=settings.CLERK_JWT_KEY,
        algorithm=settings.CLERK_JWT_ALG,
        authorized_parties=settings.authorized_parties,
    )


def get_identity_verifier() -> IdentityVerifier:
    """
    FastAPI dependency providing the token verifier.

    Tests swap it through `app.dependency_overrides`.
    """
    return _default_verifier()


def resolve_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    verifier: IdentityVerifier,
) -> str | None:
    """
    Resolve the Clerk user id of the caller.

    Flow:
      1. Session cookie (set by Clerk on the frontend domain).
      2. Fallback: `Authorization: Bearer <token>` (mobile / API clients).

    Never raises: any verification failure yields None.
    """
    settings = get_settings()

    session_token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if session_token:
        user_id = verifier.verify(session_token)
        if user_id:
            return user_id

    if credentials is not None and credentials.scheme.lower() == "bearer":
        return verifier.verify(credentials.credentials)

    return None


def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """
    Enforce authentication and return the Clerk user id.

    Raises:
        AuthenticationError(401): no session and no valid bearer token.
    """
    user_id = resolve_user_id(request, credentials, verifier)
    if user_id is None:
        raise AuthenticationError()
    return user_id


@dataclass(frozen=True)
class BusinessContext:
    """Resolved tenant scope for a business request."""

    business_id: uuid.UUID
    category: str | None
    professional_type: str | None


def resolve_business_context(session: Session, clerk_id: str) -> BusinessContext | None:
    """
    Map a Clerk user id to its business profile.

    Returns None when the user row is missing, the role is not
    'business', or onboarding never created a profile.
    """
    user = user_repo.get_by_clerk_id(session, clerk_id)
    if user is None or user.role != "business":
        return None

    profile = business_repo.get_by_user_id(session, user.id)
    if profile is None:
        return None

    return BusinessContext(
        business_id=profile.id,
        category=profile.business_category,
        professional_type=profile.professional_type,
    )


def optional_business_context(
    clerk_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
) -> BusinessContext | None:
    """
    Authenticated, but tolerate a missing business profile.

    Used by listing endpoints that degrade to an empty result.
    """
    return resolve_business_context(session, clerk_id)


def require_business_context(
    ctx: BusinessContext | None = Depends(optional_business_context),
) -> BusinessContext:
    """
    Enforce an existing business profile.

    Non-business roles get the same 404 as a missing profile so that
    the route does not reveal which one it was.

    Raises:
        NotFoundError(404): "Business not found".
    """
    if ctx is None:
        raise NotFoundError("Business not found")
    return ctx
