"""Configuration settings for Training Insights."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class InsightsSettings(BaseSettings):
    """
    Settings loaded from environment variables (prefix TRAINING_INSIGHTS_).

    The heart rate values are fallbacks used by the report service when the
    athlete's zones are unavailable. Metric functions never read settings;
    they receive plain numbers.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAINING_INSIGHTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Athlete fallbacks
    default_max_hr: int = 190
    default_threshold_hr: int = 165
    default_rest_hr: int = 60

    # Analysis windows
    fitness_days_back: int = 90
    best_effort_min_distance: float = 3000.0
    efficiency_history_limit: int = 20

    log_level: str = "INFO"

    def model_post_init(self, __context) -> None:
        """Reject heart rate fallbacks that would zero every load score."""
        if not self.default_rest_hr < self.default_threshold_hr < self.default_max_hr:
            raise ConfigurationError(
                "Heart rate fallbacks must satisfy rest < threshold < max",
                setting="default_threshold_hr",
                details={
                    "rest_hr": self.default_rest_hr,
                    "threshold_hr": self.default_threshold_hr,
                    "max_hr": self.default_max_hr,
                },
            )
        if self.fitness_days_back < 1:
            raise ConfigurationError(
                "fitness_days_back must be at least 1",
                setting="fitness_days_back",
            )


@lru_cache
def get_settings() -> InsightsSettings:
    """Get cached settings instance."""
    return InsightsSettings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and notebooks using this package."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
