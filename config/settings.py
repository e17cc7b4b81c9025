"""
Application Configuration Module

Centralizes all application settings using Pydantic Settings.
Environment variables are loaded from .env file automatically.

Usage:
    from config.settings import settings
    
    print(settings.GEMINI_MODEL)
    print(settings.DEBUG)
"""

from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, ConfigDict
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    All settings can be overridden via environment variables or .env file.
    Variable names are case-insensitive.
    """
    
    # ==========================================================================
    # Generation Service (Gemini)
    # ==========================================================================
    GOOGLE_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY"),
        description="Google Gemini API key used by every agent"
    )
    GEMINI_MODEL: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model used for interview, generation and editing"
    )
    GENERATION_TEMPERATURE: float = Field(
        default=0.7,
        description="Sampling temperature for generation calls"
    )
    GENERATION_TIMEOUT_SECONDS: float = Field(
        default=90.0,
        description="Deadline for a single generation call before the turn fails"
    )
    
    # ==========================================================================
    # Baseline Capability Dataset
    # ==========================================================================
    WEB_FEATURES_PATH: Optional[str] = Field(
        default="data/web-features.json",
        description="Local copy of the web-features data.json dataset"
    )
    WEB_FEATURES_URL: Optional[str] = Field(
        default="https://unpkg.com/web-features/data.json",
        description="Published web-features data.json, fetched when the local file is absent"
    )
    
    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )
    
    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
    
    # ==========================================================================
    # Application Settings
    # ==========================================================================
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit structured JSON logs instead of colored console output"
    )
    APP_NAME: str = Field(
        default="Airlane",
        description="Application name for OpenAPI docs"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    
    Uses LRU cache to ensure settings are only loaded once.
    
    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Singleton instance for easy import
settings = get_settings()
