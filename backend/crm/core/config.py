from functools import lru_cache
from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Insecure, only acceptable outside production. Settings refuses to load in
# production without JWT_SECRET.
FALLBACK_JWT_SECRET = "fallback-secret-key"


class Settings(BaseSettings):
    """
    Global CRM settings.
    Read from the environment and from the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project
    project_name: str = "CRM API"
    debug: bool = False
    environment: str = "development"

    # Security / JWT
    jwt_secret: Optional[str] = None
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    auth_header_name: str = "x-auth-token"

    # Database
    database_url: str = "sqlite:///./crm.db"

    # Defaults
    default_company_name: str = "My Company"
    default_list_limit: int = 100

    # CORS
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @model_validator(mode="after")
    def _require_secret_in_production(self) -> "Settings":
        if self.is_production and not self.jwt_secret:
            raise ValueError("JWT_SECRET must be set when ENVIRONMENT=production")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def uses_fallback_secret(self) -> bool:
        return not self.jwt_secret

    def resolved_jwt_secret(self) -> str:
        """Signing key for session tokens, falling back to the development key."""
        return self.jwt_secret or FALLBACK_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """Return the cached process settings."""
    return Settings()


settings = get_settings()
