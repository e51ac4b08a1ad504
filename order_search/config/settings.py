"""Configuration management for Order Search."""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Matching
    fuzzy_threshold: float = 0.7
    case_sensitive: bool = False
    exact_match: bool = False

    # Highlighting
    highlight_matches: bool = True
    highlight_open_tag: str = "<mark>"
    highlight_close_tag: str = "</mark>"

    # Output
    result_limit: int = 20

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    @field_validator("fuzzy_threshold", mode="after")
    @classmethod
    def check_threshold(cls, value: float) -> float:
        """Thresholds are similarities, so they must lie in [0, 1]."""
        if not 0.0 <= value <= 1.0:
            raise ValueError("fuzzy_threshold must be between 0 and 1")
        return value

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case the level name and strip stray whitespace."""
        return value.strip().upper()

    def search_options(self) -> dict[str, Any]:
        """SearchConfiguration overrides derived from these settings."""
        return {
            "fuzzy_threshold": self.fuzzy_threshold,
            "case_sensitive": self.case_sensitive,
            "exact_match": self.exact_match,
            "highlight_matches": self.highlight_matches,
            "highlight_open_tag": self.highlight_open_tag,
            "highlight_close_tag": self.highlight_close_tag,
        }


@lru_cache
def get_settings() -> Settings:
    """Get or create the Settings instance."""
    return Settings()
