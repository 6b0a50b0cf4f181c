"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings

_ENV_FILE = Path.cwd() / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # Server
    host: str = "0.0.0.0"
    # Plain PORT is honoured for hosting platforms that inject it
    port: int = Field(8000, validation_alias=AliasChoices("PORT", "EVENTS_PORT"))

    # Database
    db_path: str = "events.db"

    # Which table schema this deployment serves. Variants must not share a db file.
    variant: Literal["climate", "telemetry"] = "climate"

    # Abort startup when the events table cannot be created
    fail_fast_startup: bool = False

    # Logging
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _resolve_db_path(self) -> "Settings":
        """Make db_path absolute, relative to the working directory."""
        p = Path(self.db_path)
        if not p.is_absolute():
            self.db_path = str(Path.cwd() / p)
        return self

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    model_config = {
        "env_prefix": "EVENTS_",
        "env_file": str(_ENV_FILE),
        "populate_by_name": True,
        "extra": "ignore",
    }


settings = Settings()
