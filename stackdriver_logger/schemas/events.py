"""Log event model: source severities, target severity tokens and the event itself."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
import logging
from types import MappingProxyType
from typing import Any

# stdlib logging has no TRACE level; register one below DEBUG.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

FieldValue = str | int | float | bool

# Standard LogRecord attribute names; anything else on a record came from extra={...}.
_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "message",
        "thread",
        "threadName",
        "taskName",
        "getMessage",
    }
)

# Display-only attributes added by third-party loggers (e.g. uvicorn's ANSI colored message).
_EXCLUDE_EXTRAS = frozenset({"color_message"})

# Placeholders stdlib logging uses when the caller could not be found.
_UNKNOWN_PATHNAMES = frozenset({"", "(unknown file)"})


class Severity(IntEnum):
    """Source severity: five ordered levels, ERROR is most severe."""

    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def from_levelno(cls, levelno: int) -> "Severity":
        """Collapse a stdlib numeric level into the five-level model.

        Anything at or above ERROR (CRITICAL included) is ERROR; anything
        below DEBUG is TRACE.
        """
        for severity in (cls.ERROR, cls.WARN, cls.INFO, cls.DEBUG):
            if levelno >= severity:
                return severity
        return cls.TRACE


class SeverityToken(str, Enum):
    """Stackdriver LogSeverity vocabulary."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    ALERT = "ALERT"
    EMERGENCY = "EMERGENCY"

    def __str__(self) -> str:
        return self.value


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Extract user-supplied extra fields from a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and key not in _EXCLUDE_EXTRAS and value is not None
    }


def _module_path(record: logging.LogRecord) -> str | None:
    """Dotted module path when the logger was named after its module, else the file stem.

    ``getLogger(__name__)`` in ``app/services/pay.py`` gives ``app.services.pay``;
    any other logger name only tells us the stem, ``pay``.
    """
    if not record.module:
        return None
    if record.name == record.module or record.name.endswith(f".{record.module}"):
        return record.name
    return record.module


@dataclass(frozen=True)
class LogEvent:
    """One log call, read-only once built.

    Provenance members are None when the emitting logger did not capture them.
    """

    severity: Severity
    message: str
    target: str = ""
    source_file: str | None = None
    source_line: int | None = None
    module_path: str | None = None
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_record(cls, record: logging.LogRecord, message: str | None = None) -> "LogEvent":
        """Build an event from a stdlib record.

        Args:
            record: The record handed to a handler or formatter.
            message: Pre-rendered message; defaults to ``record.getMessage()``.
        """
        known_file = record.pathname not in _UNKNOWN_PATHNAMES
        return cls(
            severity=Severity.from_levelno(record.levelno),
            message=record.getMessage() if message is None else message,
            target=record.name,
            source_file=record.pathname if known_file else None,
            source_line=record.lineno or None,
            module_path=_module_path(record) if known_file else None,
            fields=record_extras(record),
        )


__all__ = [
    "TRACE",
    "FieldValue",
    "LogEvent",
    "Severity",
    "SeverityToken",
    "record_extras",
]
