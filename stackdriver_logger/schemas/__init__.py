"""Data models: log events, severities and service identity."""

from stackdriver_logger.schemas.events import (
    TRACE,
    FieldValue,
    LogEvent,
    Severity,
    SeverityToken,
    record_extras,
)
from stackdriver_logger.schemas.service import ServiceIdentity

__all__ = [
    "TRACE",
    "FieldValue",
    "LogEvent",
    "ServiceIdentity",
    "Severity",
    "SeverityToken",
    "record_extras",
]
