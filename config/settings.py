"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # NOTION
    # ===================
    notion_api_key: Optional[str] = Field(
        None,
        description="Notion integration token"
    )
    notion_version: str = Field(
        default="2022-06-28",
        description="Notion-Version header sent with every request"
    )
    notion_base_url: str = Field(
        default="https://api.notion.com/v1",
        description="Notion REST API base URL"
    )
    notion_timeout_seconds: float = Field(
        default=15,
        gt=0,
        le=120,
        description="Timeout for a single Notion HTTP call"
    )
    notion_page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Rows requested per database query page"
    )

    # ===================
    # CATALOG DATABASES
    # ===================
    notion_courses_database_id: Optional[str] = Field(
        None,
        description="Notion database holding Course entries"
    )
    notion_projects_database_id: Optional[str] = Field(
        None,
        description="Notion database holding Project entries"
    )
    notion_database_id_theme_1: Optional[str] = Field(
        None,
        description="Legacy theme 1 gallery database"
    )
    notion_database_id_theme_2: Optional[str] = Field(
        None,
        description="Legacy theme 2 gallery database"
    )

    # ===================
    # SOURCE DATABASE LOADING
    # ===================
    source_fetch_workers: int = Field(
        default=4,
        ge=1,
        le=32,
        description="Concurrent source database fetches per course"
    )
    source_cache_ttl_seconds: int = Field(
        default=0,
        ge=0,
        le=86400,
        description="Seconds a fetched snapshot stays cached (0 disables)"
    )
    project_item_limit: int = Field(
        default=24,
        ge=1,
        le=200,
        description="Maximum mapped items returned per project"
    )

    # ===================
    # PUBLISHING
    # ===================
    site_base_url: str = Field(
        default="http://localhost:5173",
        description="Public site URL used when writing CourseLink back"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8080,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def notion_configured(self) -> bool:
        """Check if a Notion token is available."""
        return bool(self.notion_api_key)

    @property
    def theme_database_map(self) -> dict[str, Optional[str]]:
        """Legacy theme number -> Notion database id."""
        return {
            "1": self.notion_database_id_theme_1,
            "2": self.notion_database_id_theme_2,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
