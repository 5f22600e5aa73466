"""
vetcare_auth.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Refuse to start in production with the insecure development secret.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_DEV_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """
    Strict env-driven configuration (prefix `VETCARE_`).
    Defaults are safe for local dev only; `prod` must supply its own secret.
    """

    model_config = SettingsConfigDict(env_prefix="VETCARE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "vetcare-auth"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Token verification
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(default=INSECURE_DEV_SECRET, repr=False)
    jwt_leeway_seconds: int = Field(default=0, ge=0)
    jwt_require_exp: bool = False

    # Identity stores (users + owners tables)
    database_url: str = "sqlite+aiosqlite:///./vetcare.db"

    @model_validator(mode="after")
    def check_secret_for_env(self) -> Settings:
        if self.env == "prod" and (
            not self.jwt_secret.strip() or self.jwt_secret == INSECURE_DEV_SECRET
        ):
            raise ValueError("VETCARE_JWT_SECRET must be set to a non-default value in prod")
        return self

    @property
    def uses_insecure_secret(self) -> bool:
        return self.jwt_secret == INSECURE_DEV_SECRET


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The secret is read once per process; rotating it requires a restart.
