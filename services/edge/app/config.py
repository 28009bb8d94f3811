"""
app.config
~~~~~~~~~~
Settings for the Bulwark edge service.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Identity
    SERVICE_NAME: str = "bulwark-edge"

    # Observability
    LOG_LEVEL: str = "INFO"

    # Environment
    BULWARK_ENV: str = "local"

    # CORS
    ALLOWED_ORIGINS: str = "*"


settings = Settings()
