"""
Global settings from environment variables.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class StepwiseSettings(BaseSettings):
    """
    Global configuration loaded from environment variables.

    Environment variables should be prefixed with STEPWISE_
    Example: STEPWISE_DEBUG=true, STEPWISE_MONGO_URI=mongodb://localhost:27017
    """

    model_config = SettingsConfigDict(
        env_prefix="STEPWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core settings
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    # Progress storage
    default_store: Literal["memory", "mongodb"] = "memory"
    mongo_uri: str | None = None
    mongo_db_name: str = "stepwise"
    mongo_collection: str = "progress"

    # Drop a case's snapshot once its root composite completes
    delete_on_complete: bool = False


# Global settings instance (singleton)
settings = StepwiseSettings()


__all__ = ["StepwiseSettings", "settings"]
