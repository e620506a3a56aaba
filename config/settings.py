"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache


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
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        ...,
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        ...,
        description="Supabase anon/public key"
    )
    sessions_table: str = Field(
        default="sessions",
        description="Table holding shop sessions and Akeneo credentials"
    )

    # ===================
    # SHOPIFY
    # ===================
    shopify_api_version: str = Field(
        default="2024-10",
        pattern=r"^\d{4}-\d{2}$",
        description="Shopify Admin API version"
    )
    shopify_timeout_seconds: float = Field(
        default=30,
        gt=0,
        le=300,
        description="Timeout for Shopify GraphQL calls"
    )
    metafield_namespace: str = Field(
        default="akeneo",
        min_length=1,
        description="Namespace for metafield definitions created from attributes"
    )

    # ===================
    # AKENEO
    # ===================
    akeneo_timeout_seconds: float = Field(
        default=30,
        gt=0,
        le=300,
        description="Timeout for Akeneo REST calls"
    )
    akeneo_page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Items per listing page"
    )
    akeneo_label_locale: str = Field(
        default="en_US",
        description="Locale used to pick labels for Shopify names and titles"
    )
    akeneo_product_locales: str = Field(
        default="nl_NL",
        description="Comma-separated locales requested for product values"
    )

    # ===================
    # SYNC
    # ===================
    sync_interval_hours: int = Field(
        default=2,
        ge=1,
        le=24,
        description="Interval the external scheduler uses to trigger sync"
    )

    @field_validator("sync_interval_hours")
    @classmethod
    def interval_divides_day(cls, v: int) -> int:
        """Cron step hours only repeat evenly when the step divides 24."""
        if 24 % v != 0:
            raise ValueError("sync_interval_hours must divide 24 (1, 2, 3, 4, 6, 8, 12 or 24)")
        return v

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
        default=8000,
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
    def sync_cron_expression(self) -> str:
        """Cron expression matching the sync interval."""
        return f"0 */{self.sync_interval_hours} * * *"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
