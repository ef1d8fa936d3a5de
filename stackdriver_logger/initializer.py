"""One-time logger setup: developer console output or Stackdriver JSON.

Call exactly once at process startup, before other threads start logging::

    import stackdriver_logger

    handle = stackdriver_logger.init()

The returned :class:`LoggerHandle` describes the installed sink. A second
call fails with :class:`LoggerAlreadyInitialized`.
"""

from collections.abc import Callable, Set
from dataclasses import dataclass, field
import logging
from pathlib import Path
import sys
import threading
from typing import Literal, TextIO

from stackdriver_logger.core.config import Settings, get_settings
from stackdriver_logger.core.errors import (
    LoggerAlreadyInitialized,
    LoggingInitError,
    SinkInstallFailure,
)
from stackdriver_logger.handlers import SeverityRoutedHandler, create_console_formatter
from stackdriver_logger.manifest import DEFAULT_MANIFEST, identity_from_manifest
from stackdriver_logger.schemas.events import TRACE
from stackdriver_logger.schemas.service import ServiceIdentity
from stackdriver_logger.services.formatter import Clock, StackdriverFormatter, utc_now
from stackdriver_logger.services.path_filter import IgnoredPathFilter, parse_ignored_paths

logger = logging.getLogger(__name__)

Mode = Literal["development", "production"]

# Above CRITICAL, so nothing passes.
_OFF = logging.CRITICAL + 10

_LEVEL_NAMES: dict[str, int] = {
    "OFF": _OFF,
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LevelFilter:
    """Parsed level filter: an optional root level plus per-logger levels."""

    default: int | None = None
    loggers: dict[str, int] = field(default_factory=dict)


def parse_level(name: str) -> int:
    """Resolve a case-insensitive level name.

    Raises:
        ValueError: If the name is not a known level.
    """
    try:
        return _LEVEL_NAMES[name.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r}") from None


def parse_level_filter(raw: str | None) -> LevelFilter:
    """Parse ``"info"`` or ``"warning,my_app.db=debug"`` style filter strings.

    A bare level sets the root level; ``name=level`` sets one logger's level.
    The last bare level wins. Empty directives are skipped.

    Raises:
        ValueError: On an unknown level or an empty logger name.
    """
    default: int | None = None
    loggers: dict[str, int] = {}
    for directive in (raw or "").split(","):
        directive = directive.strip()
        if not directive:
            continue
        name, sep, level = directive.partition("=")
        if not sep:
            default = parse_level(name)
            continue
        name = name.strip()
        if not name:
            raise ValueError(f"Missing logger name in filter directive: {directive!r}")
        loggers[name] = parse_level(level)
    return LevelFilter(default=default, loggers=loggers)


@dataclass(frozen=True)
class LoggerHandle:
    """Read-only description of the installed sink."""

    mode: Mode
    handler: logging.Handler
    service: ServiceIdentity | None = None
    report_location: bool = False
    ignored_paths: frozenset[str] = frozenset()
    level_filter: LevelFilter = field(default_factory=LevelFilter)


class _InitGuard:
    """Allows exactly one successful install per process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handle: LoggerHandle | None = None

    @property
    def handle(self) -> LoggerHandle | None:
        return self._handle

    def install(self, build: Callable[[], LoggerHandle]) -> LoggerHandle:
        with self._lock:
            if self._handle is not None:
                raise LoggerAlreadyInitialized()
            self._handle = build()
            return self._handle


_guard = _InitGuard()


def current_handle() -> LoggerHandle | None:
    """Return the installed handle, or None before initialization."""
    return _guard.handle


def formatted_handler(
    service: ServiceIdentity | None = None,
    report_location: bool = False,
    *,
    ignored_paths: Set[str] = frozenset(),
    custom_fields: bool = False,
    service_context_fallback: bool = False,
    clock: Clock = utc_now,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> SeverityRoutedHandler:
    """Build a Stackdriver JSON handler without installing it.

    For callers that assemble their own logging setup (e.g. via
    ``logging.config``). The path filter is attached to the handler, so
    ignored records are never formatted.
    """
    handler = SeverityRoutedHandler(stdout=stdout, stderr=stderr)
    handler.setFormatter(
        StackdriverFormatter(
            service,
            report_location,
            custom_fields=custom_fields,
            service_context_fallback=service_context_fallback,
            clock=clock,
        )
    )
    if ignored_paths:
        handler.addFilter(IgnoredPathFilter(ignored_paths))
    return handler


def _apply_level_filter(level_filter: LevelFilter) -> None:
    if level_filter.default is not None:
        logging.getLogger().setLevel(level_filter.default)
    for name, level in level_filter.loggers.items():
        logging.getLogger(name).setLevel(level)


def resolve_service(settings: Settings) -> ServiceIdentity | None:
    """Identity from SERVICE_NAME / SERVICE_VERSION, else from the configured manifest."""
    service = ServiceIdentity.from_env(settings)
    if service is None and settings.service_manifest:
        service = identity_from_manifest(settings.service_manifest)
    return service


def _build_handle(
    service: ServiceIdentity | None,
    report_location: bool,
    settings: Settings,
) -> LoggerHandle:
    level_filter = parse_level_filter(settings.log_filter)

    if settings.environment == "development":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(create_console_formatter())
        handle = LoggerHandle(mode="development", handler=handler, level_filter=level_filter)
    else:
        if service is None:
            service = resolve_service(settings)
        ignored_paths = (
            parse_ignored_paths(settings.ignored_paths)
            if settings.filter_ignored_paths
            else frozenset()
        )
        handler = formatted_handler(
            service,
            report_location,
            ignored_paths=ignored_paths,
            custom_fields=settings.custom_fields,
            service_context_fallback=settings.service_context_fallback,
        )
        handle = LoggerHandle(
            mode="production",
            handler=handler,
            service=service,
            report_location=report_location,
            ignored_paths=ignored_paths,
            level_filter=level_filter,
        )

    root = logging.getLogger()
    # Replace existing handlers to avoid duplicate output
    root.handlers.clear()
    root.addHandler(handle.handler)
    _apply_level_filter(level_filter)
    return handle


def try_init(
    service: ServiceIdentity | None = None,
    report_location: bool = True,
    *,
    settings: Settings | None = None,
) -> LoggerHandle:
    """Install the process-wide log sink.

    Args:
        service: Identity for ``serviceContext``. When None, SERVICE_NAME /
            SERVICE_VERSION are used, else the manifest named by
            SERVICE_MANIFEST; without any of them the key is omitted.
        report_location: Include ``reportLocation`` in every document.
        settings: Configuration; defaults to the cached environment settings.

    Returns:
        Handle describing the installed sink.

    Raises:
        LoggerAlreadyInitialized: If a sink was already installed.
        SinkInstallFailure: If the sink could not be built, e.g. the level
            filter names an unknown level or an environment variable holds an
            invalid value. Nothing is installed in that case.
    """
    def build() -> LoggerHandle:
        try:
            return _build_handle(service, report_location, settings or get_settings())
        except (ValueError, TypeError, OSError) as e:
            raise SinkInstallFailure(f"Could not install log sink: {e}") from e

    handle = _guard.install(build)
    logger.info(
        "Logging initialized",
        extra={
            "mode": handle.mode,
            "service": handle.service.name if handle.service else None,
        },
    )
    return handle


def _init_or_exit(
    service: ServiceIdentity | None,
    report_location: bool,
    settings: Settings | None = None,
) -> LoggerHandle:
    try:
        return try_init(service, report_location, settings=settings)
    except LoggingInitError as e:
        raise SystemExit(f"Could not initialize stackdriver_logger: {e}") from e


def init() -> LoggerHandle:
    """Initialize from the environment.

    The identity comes from SERVICE_NAME / SERVICE_VERSION, else from
    ``pyproject.toml`` in the working directory. Source locations are
    reported. Exits the process if initialization fails.
    """
    return _init_or_exit(None, True)


def init_with(service: ServiceIdentity | None, report_location: bool) -> LoggerHandle:
    """Initialize with an explicit identity. Exits the process on failure."""
    return _init_or_exit(service, report_location)


def init_with_manifest(
    path: str | Path = DEFAULT_MANIFEST,
    report_location: bool = True,
) -> LoggerHandle | None:
    """Initialize with the identity declared in a pyproject.toml.

    Returns:
        The handle, or None without initializing when the manifest has no
        usable name and version.
    """
    service = identity_from_manifest(path)
    if service is None:
        return None
    return _init_or_exit(service, report_location)


__all__ = [
    "LevelFilter",
    "LoggerHandle",
    "current_handle",
    "formatted_handler",
    "init",
    "init_with",
    "init_with_manifest",
    "parse_level",
    "parse_level_filter",
    "resolve_service",
    "try_init",
]
