"""Stackdriver record formatter: one log event in, one JSON document out.

Document shape::

    {
        "eventTime": "2024-05-01T12:00:00.000000+00:00",
        "message": "Error! \\n at my_file.py:1337",
        "severity": "ERROR",
        "serviceContext": {"service": "test", "version": "0.0.0"},
        "reportLocation": {"filePath": "my_file.py", "modulePath": "my_module", "lineNumber": 1337},
        "<custom field>": "<string>"
    }

``serviceContext``, ``reportLocation`` and custom fields are conditional.
"""

from collections.abc import Callable
from datetime import datetime, timezone
import json
import logging
from typing import Any

from stackdriver_logger.schemas.events import LogEvent, Severity
from stackdriver_logger.schemas.service import ServiceIdentity
from stackdriver_logger.services.fields import collect_fields
from stackdriver_logger.services.severity import map_level

Clock = Callable[[], datetime]

# Custom fields never overwrite these, whether or not they are present in a given document.
RESERVED_KEYS = frozenset({"eventTime", "message", "severity", "serviceContext", "reportLocation"})

UNKNOWN_FILE = "unknown_file"
UNKNOWN_SERVICE = "unknown_service"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_event_time(moment: datetime) -> str:
    """RFC 3339 with microseconds and an explicit UTC offset."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def format_message(event: LogEvent) -> str:
    """Append the ``at file:line`` trailer to ERROR messages."""
    if event.severity != Severity.ERROR:
        return event.message
    source_file = event.source_file or UNKNOWN_FILE
    source_line = event.source_line or 0
    return f"{event.message} \n at {source_file}:{source_line}"


def format_record(
    event: LogEvent,
    service: ServiceIdentity | None = None,
    report_location: bool = False,
    *,
    custom_fields: bool = False,
    service_context_fallback: bool = False,
    clock: Clock = utc_now,
) -> dict[str, Any]:
    """Build the Stackdriver document for one event.

    Args:
        event: The event to format.
        service: Identity for ``serviceContext``; None or an all-empty identity
            counts as absent.
        report_location: Include the ``reportLocation`` block.
        custom_fields: Merge the event's fields as top-level string keys.
        service_context_fallback: Emit ``{"service": "unknown_service"}`` instead of
            omitting ``serviceContext`` when no identity is available.
        clock: Source of ``eventTime``; the event carries no timestamp of its own.

    Returns:
        The document as a dict, ready for ``json.dumps``.
    """
    document: dict[str, Any] = {
        "eventTime": format_event_time(clock()),
        "message": format_message(event),
        "severity": map_level(event.severity).value,
    }

    if service is not None and not service.is_empty:
        document["serviceContext"] = {"service": service.name, "version": service.version}
    elif service_context_fallback:
        document["serviceContext"] = {"service": UNKNOWN_SERVICE}

    if report_location:
        document["reportLocation"] = {
            "filePath": event.source_file,
            "modulePath": event.module_path,
            "lineNumber": event.source_line,
        }

    if custom_fields:
        for key, value in sorted(collect_fields(event).items()):
            if key not in RESERVED_KEYS:
                document[key] = value

    return document


def render_document(document: dict[str, Any]) -> str:
    """Serialize compactly with sorted keys so identical input gives identical bytes."""
    return json.dumps(
        document,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


class StackdriverFormatter(logging.Formatter):
    """Format stdlib log records as Stackdriver JSON, one object per line."""

    def __init__(
        self,
        service: ServiceIdentity | None = None,
        report_location: bool = False,
        *,
        custom_fields: bool = False,
        service_context_fallback: bool = False,
        clock: Clock = utc_now,
    ) -> None:
        super().__init__()
        self.service = service
        self.report_location = report_location
        self.custom_fields = custom_fields
        self.service_context_fallback = service_context_fallback
        self.clock = clock

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if record.stack_info:
            message = f"{message}\n{self.formatStack(record.stack_info)}"
        document = format_record(
            LogEvent.from_record(record, message=message),
            self.service,
            self.report_location,
            custom_fields=self.custom_fields,
            service_context_fallback=self.service_context_fallback,
            clock=self.clock,
        )
        return render_document(document)


__all__ = [
    "RESERVED_KEYS",
    "UNKNOWN_FILE",
    "UNKNOWN_SERVICE",
    "StackdriverFormatter",
    "format_event_time",
    "format_message",
    "format_record",
    "render_document",
    "utc_now",
]
