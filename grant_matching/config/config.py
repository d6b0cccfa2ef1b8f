"""Configuration management for the matching engine's callers.

Presentation thresholds (which matches are shown, what counts as a high
match) live here as settings rather than as constants inside the engine.
"""

import logging
import sys
from typing import Optional
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

ENV_PREFIX = "GRANT_MATCHING_"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class MatchingSettings(BaseSettings):
    """Matching configuration from environment variables (GRANT_MATCHING_*)."""

    min_match_score: int = Field(default=50, ge=0, le=100)
    max_results: Optional[int] = Field(default=20, ge=1)
    high_match_threshold: int = Field(default=75, ge=0, le=100)
    summary_top_n: int = Field(default=10, ge=1)
    max_workers: Optional[int] = Field(default=None, ge=1)
    weights_file: Optional[str] = None
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": ENV_PREFIX, "case_sensitive": False, "extra": "ignore"}


def validate_settings() -> MatchingSettings:
    """Load and validate settings from environment.

    Raises ValueError listing ALL invalid variables (not just the first one).
    """
    try:
        return MatchingSettings()
    except ValidationError as exc:
        invalid = sorted({
            f"{ENV_PREFIX}{str(err['loc'][0]).upper()}"
            for err in exc.errors()
            if err.get("loc")
        })
        names = ", ".join(invalid) or "unknown"
        raise ValueError(
            f"Invalid environment variable(s): {names}. "
            "Please fix them in your .env file or environment."
        ) from exc


def load_settings() -> MatchingSettings:
    """Load settings from environment (host application entry point)."""
    return validate_settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for host applications.

    The level defaults to ``GRANT_MATCHING_LOG_LEVEL``. The library itself
    only creates module loggers and never installs handlers.
    """
    level = level or load_settings().log_level
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.getLogger().setLevel(level.upper())
