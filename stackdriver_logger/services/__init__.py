"""Formatting pipeline: severity mapping, field collection, path filtering, JSON rendering."""

from stackdriver_logger.services.fields import collect_fields, to_display_string
from stackdriver_logger.services.formatter import (
    StackdriverFormatter,
    format_record,
    render_document,
)
from stackdriver_logger.services.path_filter import (
    IgnoredPathFilter,
    is_allowed,
    parse_ignored_paths,
)
from stackdriver_logger.services.severity import map_level

__all__ = [
    "IgnoredPathFilter",
    "StackdriverFormatter",
    "collect_fields",
    "format_record",
    "is_allowed",
    "map_level",
    "parse_ignored_paths",
    "render_document",
    "to_display_string",
]
