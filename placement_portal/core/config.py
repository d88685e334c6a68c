"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for runtime config values.

Business caps (application cap, posting cap, slot cap) are NOT here:
they are rules of the domain and live on the entities themselves.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Internship Placement Portal"
    debug: bool = False
    log_level: str = "INFO"

    # Database (SQLAlchemy URL; default is an in-memory SQLite database)
    database_url: str = "sqlite://"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Demo data loaded on startup (empty tables only)
    seed_demo_data: bool = True

    # Default notes stamped when staff leave the note blank
    default_withdrawal_approve_note: str = "Approved by Career Center staff"
    default_withdrawal_reject_note: str = "Rejected by Career Center staff"
    default_rep_rejection_reason: str = "Rejected by Career Center staff"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PORTAL_",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
