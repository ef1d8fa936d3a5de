"""Core: config and errors."""

from stackdriver_logger.core.config import Settings, get_settings
from stackdriver_logger.core.errors import (
    LoggerAlreadyInitialized,
    LoggingInitError,
    ManifestError,
    SinkInstallFailure,
)

__all__ = [
    "LoggerAlreadyInitialized",
    "LoggingInitError",
    "ManifestError",
    "Settings",
    "SinkInstallFailure",
    "get_settings",
]
