"""
Configuration management for PawShelters.
Loads settings from environment variables and provides typed configuration access.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment: development, staging, production")
    log_level: str = Field(default="INFO", description="Logging level")

    # Supabase / PostgREST
    supabase_url: str = Field(default="http://localhost:54321", description="Supabase project URL")
    supabase_anon_key: str = Field(default="", description="Supabase anonymous (public) API key")
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key, used for repair writes when set"
    )

    # Tables
    profiles_table: str = Field(default="profiles", description="Table holding account profiles")
    shelter_details_table: str = Field(
        default="shelter_details",
        description="Table holding shelter detail records"
    )
    animals_table: str = Field(default="animals", description="Table holding animals")

    # API Settings
    api_timeout: int = Field(default=30, description="API request timeout in seconds")

    # Shelter List Settings
    fetch_concurrency: int = Field(
        default=10,
        ge=1,
        description="Maximum number of shelters enriched at the same time"
    )
    repair_on_load: bool = Field(
        default=True,
        description="Run the shelter detail repair job on every page load"
    )
    load_error_message: str = Field(
        default="Failed to load shelters. Please try again.",
        description="Message shown when the shelter list cannot be loaded"
    )
    default_shelter_type: str = Field(
        default="animal_shelter",
        description="Shelter type used when a shelter has no detail record"
    )
    unknown_location: str = Field(
        default="Unknown",
        description="Location used when a shelter has no address"
    )

    # Web Service
    web_host: str = Field(default="0.0.0.0", description="Host for the HTTP service")
    web_port: int = Field(default=8080, description="Port for the HTTP service")

    # Testing
    mock_apis: bool = Field(default=False, description="Use mock API responses")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings


# Convenience access
settings = get_settings()
