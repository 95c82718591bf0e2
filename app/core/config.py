# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Supabase Postgres connection string)
      - CLERK_JWT_KEY (PEM public key from the Clerk dashboard,
        or a shared secret when CLERK_JWT_ALG is an HS* algorithm)

    Optional:
      - CLERK_AUTHORIZED_PARTIES (comma-separated list of allowed `azp`)
      - CORS_ORIGINS (comma-separated list of frontend origins)
    """

    PROJECT_NAME: str = "Salon Booking API"
    API_PREFIX: str = "/api"

    # Supabase Postgres
    DATABASE_URL: str

    # Clerk session token verification (backend-side)
    CLERK_JWT_KEY: str
    CLERK_JWT_ALG: str = "RS256"
    CLERK_AUTHORIZED_PARTIES: str = ""

    # Clerk stores the short-lived session JWT in this cookie
    SESSION_COOKIE_NAME: str = "__session"

    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def authorized_parties(self) -> list[str]:
        return _split_csv(self.CLERK_AUTHORIZED_PARTIES)

    @property
    def cors_origins(self) -> list[str]:
        return _split_csv(self.CORS_ORIGINS)


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
