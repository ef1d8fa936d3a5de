"""Exact-match denylist of logger names."""

from collections.abc import Set
import logging


def parse_ignored_paths(raw: str | None) -> frozenset[str]:
    """Parse a comma-separated list of logger names.

    Empty segments (leading, trailing or doubled commas) are dropped.
    Whitespace is not trimmed: ``"a, b"`` yields ``{"a", " b"}``.
    """
    if not raw:
        return frozenset()
    return frozenset(segment for segment in raw.split(",") if segment)


def is_allowed(target: str, ignored_paths: Set[str]) -> bool:
    """Return False when ``target`` exactly equals an ignored name.

    No prefix matching: ``app.db.pool`` is allowed even if ``app.db`` is ignored.
    """
    return target not in ignored_paths


class IgnoredPathFilter(logging.Filter):
    """Drop records whose logger name is in the ignored set."""

    def __init__(self, ignored_paths: Set[str]) -> None:
        super().__init__()
        self.ignored_paths = frozenset(ignored_paths)

    def filter(self, record: logging.LogRecord) -> bool:
        return is_allowed(record.name, self.ignored_paths)


__all__ = ["IgnoredPathFilter", "is_allowed", "parse_ignored_paths"]
