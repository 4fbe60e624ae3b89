"""Configuration module."""
from .settings import (
    APISettings,
    AuthSettings,
    DatabaseSettings,
    MonitoringSettings,
    Settings,
    settings,
)

__all__ = [
    "APISettings",
    "AuthSettings",
    "DatabaseSettings",
    "MonitoringSettings",
    "Settings",
    "settings",
]
