"""Configuration management for the Reading Tracker API."""
import os
from pathlib import Path
from urllib.parse import urlparse
from typing import Optional
from zoneinfo import ZoneInfo
from datetime import tzinfo

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PLANS_FILE = str(Path(__file__).resolve().parent / "data" / "plans.json")


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    app_name: str = Field(default="Reading Tracker API", env="APP_NAME")
    debug: bool = Field(default=False, env="DEBUG")

    # Storage Configuration
    storage_backend: str = Field(default="memory", env="STORAGE_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379/0", env="REDIS_URL")
    # Must name the table created by alembic 0001_create_key_value_store
    kv_table_name: str = Field(default="key_value_store", env="KV_TABLE_NAME")

    # Database Configuration (Heroku compatible)
    database_url: str = Field(default="", env="DATABASE_URL")
    db_name: str = Field(default="", env="DB_NAME")
    db_user: str = Field(default="", env="DB_USER")
    db_password: str = Field(default="", env="DB_PASSWORD")
    db_host: str = Field(default="localhost", env="DB_HOST")
    db_port: int = Field(default=5432, env="DB_PORT")

    # Storage keys, one JSON document per logical store
    progress_key: str = Field(default="bible-reading-progress", env="PROGRESS_KEY")
    notes_key: str = Field(default="bible-reading-notes", env="NOTES_KEY")
    study_focus_key: str = Field(default="bible-reading-study-focus", env="STUDY_FOCUS_KEY")
    custom_plans_key: str = Field(default="bible-reading-custom-plans", env="CUSTOM_PLANS_KEY")
    reminders_key: str = Field(default="bible-reading-notifications", env="REMINDERS_KEY")

    # Calendar / catalog
    timezone: str = Field(default="", env="TIMEZONE")
    plans_file: str = Field(default=DEFAULT_PLANS_FILE, env="PLANS_FILE")

    @computed_field
    @property
    def allowed_origins(self) -> list[str]:
        """Parse allowed origins from environment variable or use defaults."""
        allowed_origins_str = os.getenv(
            "ALLOWED_ORIGINS",
            "http://localhost:5173,http://localhost:3000"
        )
        return [origin.strip() for origin in allowed_origins_str.split(",") if origin.strip()]

    @property
    def local_timezone(self) -> Optional[tzinfo]:
        """Zone used for calendar-day arithmetic; None means the host's local zone."""
        if self.timezone and self.timezone.strip():
            return ZoneInfo(self.timezone.strip())
        return None

    @property
    def storage_keys(self) -> list[str]:
        return [
            self.progress_key,
            self.notes_key,
            self.study_focus_key,
            self.custom_plans_key,
            self.reminders_key,
        ]

    @property
    def db_config(self) -> dict:
        """Get database configuration, preferring DATABASE_URL for Heroku."""
        if self.database_url and self.database_url.strip():
            parsed = urlparse(self.database_url)
            return {
                'dbname': parsed.path[1:],  # Remove leading slash
                'user': parsed.username,
                'password': parsed.password,
                'host': parsed.hostname,
                'port': parsed.port or 5432
            }
        elif self.db_name.strip() and self.db_user.strip():
            return {
                'dbname': self.db_name,
                'user': self.db_user,
                'password': self.db_password,
                'host': self.db_host,
                'port': self.db_port
            }
        else:
            # Fallback configuration for development
            return {
                'dbname': 'reading_tracker',
                'user': 'postgres',
                'password': 'postgres',
                'host': 'localhost',
                'port': 5432
            }

    model_config = SettingsConfigDict(
        env_file=None,  # Don't load from .env file
        case_sensitive=False,
        extra="ignore"
    )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
