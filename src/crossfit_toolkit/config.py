"""Configuration settings for the CrossFit Toolkit."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_DIR = Path.home() / ".crossfit_toolkit"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field can be overridden with a ``CROSSFIT_TOOLKIT_`` prefixed
    environment variable, e.g. ``CROSSFIT_TOOLKIT_DB_PATH=/tmp/toolkit.db``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CROSSFIT_TOOLKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path = DEFAULT_DATA_DIR
    db_path: Path | None = None

    # Logging
    log_level: str = "WARNING"

    # Recovery scoring
    default_min_sleep_hours: float = 7
    gap_reset_days: int = 2
    check_in_window_days: int = 30

    # Goal trend projection
    trend_window: int = 5
    trend_tolerance_days: int = 7

    # Display
    default_weight_unit: str = "kg"
    default_distance_unit: str = "m"

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.db_path is None:
            self.db_path = self.data_dir / "toolkit.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
