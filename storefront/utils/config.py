# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()


class AnalyticsSettings(BaseSettings):
    """Traffic analytics storage and retention settings."""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    data_dir: Path = Field(default=Path("data"), description="Directory for persisted JSON files")
    traffic_file: str = Field(default="traffic.json", description="Traffic events file name")
    insights_file: str = Field(default="insights.json", description="Insights file name")

    # Retention
    max_events: int = Field(default=10_000, description="Maximum events kept in memory")
    max_insights: int = Field(default=1_000, description="Maximum insights kept in memory")
    today_cap: int = Field(default=1_000, description="Maximum events in the today bucket")
    week_cap: int = Field(default=7_000, description="Maximum events in the last-week bucket")
    month_cap: int = Field(default=30_000, description="Maximum events in the last-month bucket")

    # Persistence
    flush_every: int = Field(default=100, description="Flush traffic file every N ingested events")
    flush_interval_seconds: int = Field(
        default=60, description="Interval of the background flush of both files"
    )

    # Query limits
    top_products_limit: int = Field(default=5, description="Products returned by top products")
    high_priority_limit: int = Field(
        default=10, description="Insights returned by high-priority insights"
    )

    @property
    def data_dir_path(self) -> Path:
        """Resolve data directory to absolute path from project root."""
        if self.data_dir.is_absolute():
            return self.data_dir
        # Import here to avoid circular imports
        from storefront.utils.paths import get_project_root

        return get_project_root() / self.data_dir

    @property
    def traffic_path(self) -> Path:
        return self.data_dir_path / self.traffic_file

    @property
    def insights_path(self) -> Path:
        return self.data_dir_path / self.insights_file


class InventorySettings(BaseSettings):
    """Tally ERP connection settings for inventory sync.

    When disabled, the catalog uses an in-memory inventory seeded from the
    catalog's own stock levels.
    """

    model_config = SettingsConfigDict(env_prefix="TALLY_")

    enabled: bool = Field(default=False, description="Sync inventory with Tally ERP")
    host: str = Field(default="localhost", description="Tally server host")
    port: int = Field(default=9000, description="Tally XML interface port")
    company_name: Optional[str] = Field(default=None, description="Company name in Tally")
    timeout_seconds: int = Field(default=10, description="HTTP request timeout in seconds")

    @property
    def url(self) -> str:
        """Build the Tally XML endpoint URL."""
        return f"http://{self.host}:{self.port}"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)

    # General settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
