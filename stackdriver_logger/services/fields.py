"""Custom field collection: caller-attached key/value context, stringified."""

from typing import Any

from stackdriver_logger.schemas.events import LogEvent


def to_display_string(value: Any) -> str:
    """Render a field value in its natural display form.

    Booleans render as ``true``/``false``; strings pass through; numbers use
    ``str()``. Values outside the closed field type also fall back to
    ``str()`` so collection never fails.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def collect_fields(event: LogEvent) -> dict[str, str]:
    """Collect an event's fields into a name -> display string mapping."""
    return {key: to_display_string(value) for key, value in event.fields.items()}


__all__ = ["collect_fields", "to_display_string"]
