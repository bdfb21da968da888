"""
Runtime configuration for the coaching schedule API.

Values come from the process environment (or a local ``.env`` file) and are
validated once. Routers and services never read ``os.environ`` directly; they
receive a ``Settings`` through ``api.deps.get_settings`` so tests can override
it.

Environment variables:
    ENVIRONMENT                  development | staging | production | test
    SUPABASE_URL                 project URL; storage is unavailable without it
    SUPABASE_SERVICE_ROLE_KEY    key used by the repositories
    JWT_SECRET / JWT_ALGORITHM   bearer token verification (HMAC only)
    JWT_AUDIENCE                 expected ``aud`` claim, optional
    ENFORCE_UNIQUE_ASSIGNMENTS   reject same-day duplicate assignments
    CORS_ALLOWED_ORIGINS         comma-separated extra origins
    SENTRY_DSN                   error reporting, optional
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "staging", "production", "test")

# Tokens are verified with a shared secret, so only the HMAC family applies.
JWT_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """Environment-backed settings for the API process."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="One of: " + ", ".join(ENVIRONMENTS),
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Service role key; the repositories enforce access themselves",
    )

    # -------------------------------------------------------------------------
    # Bearer tokens
    # -------------------------------------------------------------------------
    jwt_secret: str = Field(
        default="coaching-schedule-jwt-secret-change-in-production",
        description="Shared secret used to verify bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="Signing algorithm of bearer tokens")
    jwt_audience: Optional[str] = Field(
        default=None,
        description="Expected 'aud' claim; not checked when unset",
    )

    # -------------------------------------------------------------------------
    # Scheduling policy
    # -------------------------------------------------------------------------
    enforce_unique_assignments: bool = Field(
        default=False,
        description=(
            "Reject assigning the same workout (or program start) to the same "
            "client on the same date twice"
        ),
    )

    # -------------------------------------------------------------------------
    # HTTP and error reporting
    # -------------------------------------------------------------------------
    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated origins allowed in addition to local dev servers",
    )
    sentry_dsn: Optional[str] = Field(default=None, description="Sentry DSN; reporting is off when unset")

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, value: str) -> str:
        environment = value.strip().lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(
                f"Invalid environment '{value}'. Expected one of: {', '.join(ENVIRONMENTS)}"
            )
        return environment

    @field_validator("jwt_algorithm")
    @classmethod
    def require_hmac_algorithm(cls, value: str) -> str:
        algorithm = value.strip().upper()
        if algorithm not in JWT_ALGORITHMS:
            raise ValueError(
                f"Unsupported JWT algorithm '{value}'. Expected one of: {', '.join(JWT_ALGORITHMS)}"
            )
        return algorithm

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @property
    def storage_configured(self) -> bool:
        """True when both Supabase URL and key are present."""
        return bool(self.supabase_url and self.supabase_service_role_key)


@lru_cache
def get_settings() -> Settings:
    """
    Settings for this process, loaded on first use.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()
