"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "HealthJournal"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development | staging | production

    # --- Logging ---
    log_level: str = "INFO"
    log_file: str = ""  # append-only journal log; empty disables file logging

    # --- Tracking ---
    tracking_config_path: str = ""  # override for the bundled tracking_config.yaml

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "HEALTHJOURNAL_",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
