# tests/conftest.py
import os
import uuid
from datetime import datetime, timedelta, timezone

# Settings are read once at import time; point them at throwaway values first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CLERK_JWT_KEY"] = "test-secret"
os.environ["CLERK_JWT_ALG"] = "HS256"
os.environ["CLERK_AUTHORIZED_PARTIES"] = ""

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.database import get_session
from app.main import app
from app.models.business import BusinessProfile, JobSeekerInfo, ShopSalonInfo
from app.models.user import User
from app.services.availability import DEFAULT_WORKING_HOURS

JWT_KEY = "test-secret"


def make_token(sub: str, *, expires_in: int = 300, key: str = JWT_KEY, **claims) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        **claims,
    }
    return jwt.encode(payload, key, algorithm="HS256")


def auth(sub: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(sub)}"}


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_business(session: Session):
    """
    Factory seeding a business user with a profile.

    Returns (clerk_id, profile).
    """

    def _make(
        category: str = "salon_owner",
        professional_type: str = "barber",
        hours: list[dict] | None = None,
    ):
        clerk_id = f"user_{uuid.uuid4().hex[:12]}"
        user = User(clerk_id=clerk_id, role="business")
        session.add(user)
        session.commit()
        session.refresh(user)

        profile = BusinessProfile(
            user_id=user.id,
            business_category=category,
            professional_type=professional_type,
            onboarding_completed=True,
        )
        session.add(profile)
        session.commit()
        session.refresh(profile)

        if category == "salon_owner":
            session.add(
                ShopSalonInfo(
                    business_info_id=profile.id,
                    shop_name="Fade Factory",
                    business_hours=hours if hours is not None else [dict(row) for row in DEFAULT_WORKING_HOURS],
                )
            )
        elif category == "job_seeker":
            session.add(JobSeekerInfo(business_info_id=profile.id, years_of_experience=3))
        session.commit()

        return clerk_id, profile

    return _make


@pytest.fixture
def business(make_business):
    return make_business()


@pytest.fixture
def business_headers(business) -> dict[str, str]:
    clerk_id, _ = business
    return auth(clerk_id)


@pytest.fixture(name="make_token")
def make_token_fixture():
    return make_token


@pytest.fixture
def headers_for():
    """Bearer headers for an arbitrary Clerk user id."""
    return auth
