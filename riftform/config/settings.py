"""
Configuration settings using Pydantic Settings.

Analytics thresholds can be tuned through environment variables or a
``.env`` file; the pure scoring functions receive them as explicit arguments.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Aggregation windows
    recent_window_size: int = Field(20, ge=1, alias="RECENT_WINDOW_SIZE")
    trend_slice_size: int = Field(5, ge=1, alias="TREND_SLICE_SIZE")
    stability_min_samples: int = Field(5, ge=1, alias="STABILITY_MIN_SAMPLES")

    # Feedback
    best_champion_min_games: int = Field(5, ge=1, alias="BEST_CHAMPION_MIN_GAMES")
    feedback_top_n: int = Field(2, ge=1, le=2, alias="FEEDBACK_TOP_N")

    # Application Configuration
    app_name: str = Field("riftform", alias="APP_NAME")
    app_env: str = Field("development", alias="APP_ENV")
    app_debug: bool = Field(False, alias="APP_DEBUG")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached instance so the next call re-reads the environment."""
    global _settings
    _settings = None
