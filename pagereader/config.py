"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pagereader import __version__

DEFAULT_CHAR_THRESHOLD = 500
DEFAULT_N_TOP_CANDIDATES = 5


class Settings(BaseSettings):
    """Settings loaded from PAGEREADER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PAGEREADER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"

    # Extraction defaults
    char_threshold: int = Field(default=DEFAULT_CHAR_THRESHOLD, gt=0)
    nb_top_candidates: int = Field(default=DEFAULT_N_TOP_CANDIDATES, gt=0)

    # Fetching (CLI only)
    fetch_timeout: float = 30.0
    user_agent: str = f"pagereader/{__version__}"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
