"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Component settings classes (records, sink, redis, http)
- Cached settings access via get_settings()
"""

from .settings import (
    Environment,
    HttpFormatterSettings,
    LogFormat,
    LogLevel,
    RecordDefaults,
    RedisSettings,
    Settings,
    SinkBackend,
    SinkSettings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    "SinkBackend",
    # Component settings
    "RecordDefaults",
    "RedisSettings",
    "SinkSettings",
    "HttpFormatterSettings",
]
