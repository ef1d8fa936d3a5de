"""Stackdriver-formatted JSON logging with a human-readable fallback for development."""

from stackdriver_logger.core import (
    LoggerAlreadyInitialized,
    LoggingInitError,
    ManifestError,
    Settings,
    SinkInstallFailure,
    get_settings,
)
from stackdriver_logger.handlers import SeverityRoutedHandler, create_console_formatter
from stackdriver_logger.initializer import (
    LoggerHandle,
    current_handle,
    formatted_handler,
    init,
    init_with,
    init_with_manifest,
    try_init,
)
from stackdriver_logger.manifest import read_manifest
from stackdriver_logger.schemas import (
    TRACE,
    LogEvent,
    ServiceIdentity,
    Severity,
    SeverityToken,
)
from stackdriver_logger.services import (
    IgnoredPathFilter,
    StackdriverFormatter,
    collect_fields,
    format_record,
    is_allowed,
    map_level,
    parse_ignored_paths,
)

__version__ = "0.8.2"

__all__ = [
    "TRACE",
    "IgnoredPathFilter",
    "LogEvent",
    "LoggerAlreadyInitialized",
    "LoggerHandle",
    "LoggingInitError",
    "ManifestError",
    "ServiceIdentity",
    "Settings",
    "Severity",
    "SeverityRoutedHandler",
    "SeverityToken",
    "SinkInstallFailure",
    "StackdriverFormatter",
    "collect_fields",
    "create_console_formatter",
    "current_handle",
    "format_record",
    "formatted_handler",
    "get_settings",
    "init",
    "init_with",
    "init_with_manifest",
    "is_allowed",
    "map_level",
    "parse_ignored_paths",
    "read_manifest",
    "try_init",
]
