"""
RuralHealth Configuration Module

Centralized configuration management using Pydantic Settings.
Supports environment variables and .env files.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Main application settings."""
    
    model_config = SettingsConfigDict(
        env_prefix="RURALHEALTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    env: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    log_json: bool = False


class AnalyticsSettings(BaseSettings):
    """Defaults applied by the analytics service."""
    
    model_config = SettingsConfigDict(
        env_prefix="ANALYTICS_",
        env_file=".env",
        extra="ignore",
    )
    
    default_time_range: Literal["7days", "30days", "90days", "6months", "1year", "all"] = "30days"
    medication_effect_window_days: int = Field(default=30, ge=1)


class MockDataSettings(BaseSettings):
    """Mock data source settings."""
    
    model_config = SettingsConfigDict(
        env_prefix="MOCK_DATA_",
        env_file=".env",
        extra="ignore",
    )
    
    # None means a fresh random dataset on every run
    seed: Optional[int] = 42
    history_days: int = Field(default=90, ge=1)


class Settings:
    """
    Aggregated settings container.
    
    Usage:
        from ruralhealth.config import get_settings
        settings = get_settings()
        print(settings.analytics.default_time_range)
    """
    
    def __init__(self):
        self.app = AppSettings()
        self.analytics = AnalyticsSettings()
        self.mock_data = MockDataSettings()
    
    @property
    def is_development(self) -> bool:
        return self.app.env == "development"
    
    @property
    def is_production(self) -> bool:
        return self.app.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    
    Returns:
        Settings: The application settings
    """
    return Settings()
