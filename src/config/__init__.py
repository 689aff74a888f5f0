"""Configuration loading and settings."""

from src.config.loader import ConfigurationError, load_config, merge_with_env
from src.config.settings import AppSettings, get_settings, reload_settings

__all__ = [
    "AppSettings",
    "ConfigurationError",
    "get_settings",
    "load_config",
    "merge_with_env",
    "reload_settings",
]
