"""
Configuration settings for the folders service
"""

from __future__ import annotations

from typing import Optional

from services.common.settings import BaseSettings, Field, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Service configuration
    service_name: str = "folders"

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field(default="json", validation_alias="LOG_FORMAT")

    # Pagination
    pagination_secret_key: str = Field(
        default="change-me-in-production",
        validation_alias="PAGINATION_SECRET_KEY",
        description="Secret key for continuation token signing",
    )
    pagination_token_ttl_seconds: int = Field(
        default=0,
        validation_alias="PAGINATION_TOKEN_TTL_SECONDS",
        description="Lifetime of an unused continuation token; 0 keeps tokens forever",
    )
    pagination_store_shards: int = Field(
        default=16,
        validation_alias="PAGINATION_STORE_SHARDS",
        description="Number of independently locked shards in the token store",
    )

    # Folder source
    folder_data_path: Optional[str] = Field(
        default=None,
        validation_alias="FOLDER_DATA_PATH",
        description="JSON file with the folder collection; bundled sample data if unset",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
