"""
iam_service.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, bootstrap password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me-please-32-bytes"


class Settings(BaseSettings):
    """
    Enterprise pattern:
    - Strict env-driven configuration
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="IAM_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "iam-service"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Token issuance. From env, `token_lifetime` is an ISO 8601 duration ("PT1H") or "HH:MM:SS".
    jwt_alg: str = "HS256"
    jwt_issuer: str = "iam-service"
    jwt_audience: str = "iam-api"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False)
    token_lifetime: timedelta = timedelta(hours=1)

    # Role sets gating the administration endpoints (any one role is enough).
    admin_roles: list[str] = Field(default_factory=lambda: ["admin", "management"])

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./iam.db"
    password_hash_rounds: int = Field(default=12, ge=4, le=31)

    # Seed data applied on startup (idempotent).
    bootstrap_roles: list[str] = Field(default_factory=lambda: ["admin", "management", "user"])
    bootstrap_admin_username: str | None = None
    bootstrap_admin_password: str | None = Field(default=None, repr=False)

    @model_validator(mode="after")
    def _check_prod_secret(self) -> Settings:
        if self.env == "prod" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("IAM_JWT_SECRET must be set in prod")
        if self.token_lifetime <= timedelta(0):
            raise ValueError("token_lifetime must be positive")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The signing secret is read once here and handed to the TokenIssuer built in the
# app factory; nothing else should read `jwt_secret` directly.
