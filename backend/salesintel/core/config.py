# backend/salesintel/core/config.py

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./salesintel.db"

    # Put this on the host as JWT_SECRET_KEY
    jwt_secret_key: str = Field(
        default="dev-secret-change-me",
        validation_alias=AliasChoices("JWT_SECRET_KEY", "JWT_SECRET", "SECRET_KEY"),
    )
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080

    # Comma-separated allowlist in prod, fallback to FRONTEND_URL/local
    cors_origins: str = ""
    frontend_url: str = "http://localhost:3000"

    auto_create_tables: bool = True
    seed_demo_users: bool = False

    def allowed_origins(self) -> List[str]:
        cors_env = self.cors_origins.strip()
        if cors_env:
            return [o.strip() for o in cors_env.split(",") if o.strip()]
        return sorted({self.frontend_url.strip(), "http://localhost:3000"})


settings = Settings()
