"""
BookmarkShelf v1 - Shared Configuration Module

This module provides centralized configuration management for the ingest tool.
It loads settings from environment variables and provides typed access.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestSettings(BaseSettings):
    """Bookmarks source and store configuration"""
    user_profile: Optional[str] = Field(default=None, alias="USERPROFILE")
    chrome_profile: str = Field(default="Default", alias="CHROME_PROFILE")
    bookmarks_file: Optional[Path] = Field(default=None, alias="BOOKMARKS_FILE")
    db_path: Path = Field(default=Path("bookmarks.db"), alias="BOOKMARKS_DB_PATH")
    batch_size: int = Field(default=500, gt=0, alias="BATCH_SIZE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings"""
    env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Config:
    """Main configuration class that combines all settings"""

    def __init__(self):
        self.ingest = IngestSettings()
        self.app = AppSettings()


# Global config instance
config = Config()


# Helper function to get config
def get_config() -> Config:
    """Get the global configuration instance"""
    return config

