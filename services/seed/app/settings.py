from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class SeedSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="forbid")

    database_url: str
    log_level: str = "info"

    # When set, /seed requires a matching X-Admin-Token header.
    admin_token: str | None = None

    bcrypt_rounds: int = 10
    pool_size: int = 5
    tracing_enabled: bool = False


SETTINGS = SeedSettings()
