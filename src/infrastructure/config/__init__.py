"""
Configuration module for the procuration back-office.

settings.py is the single entry point for environment-driven configuration.
"""

from src.infrastructure.config.async_database import (
    AsyncDatabase,
    to_async_url,
)
from src.infrastructure.config.settings import (
    Settings,
    get_settings,
    reload_settings,
)


__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Async database
    "AsyncDatabase",
    "to_async_url",
]
