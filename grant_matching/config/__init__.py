"""Environment-driven settings for the matching engine."""

from .config import MatchingSettings, configure_logging, load_settings, validate_settings

__all__ = ["MatchingSettings", "configure_logging", "load_settings", "validate_settings"]
