"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
from datetime import datetime, timezone
import logging
from pathlib import Path

import pytest

from stackdriver_logger import initializer
from stackdriver_logger.core import Settings, get_settings
from stackdriver_logger.schemas import LogEvent, ServiceIdentity, Severity
from stackdriver_logger.services.formatter import Clock

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
FIXED_EVENT_TIME = "2024-05-01T12:30:45.123456+00:00"

_ENV_VARS = (
    "ENVIRONMENT",
    "SERVICE_NAME",
    "SERVICE_VERSION",
    "SERVICE_MANIFEST",
    "LOG_FILTER",
    "IGNORED_PATHS",
    "FILTER_IGNORED_PATHS",
    "CUSTOM_FIELDS",
    "SERVICE_CONTEXT_FALLBACK",
)


@pytest.fixture(autouse=True)
def clean_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Isolate tests from the host's logger environment, working directory and cached settings."""
    monkeypatch.chdir(tmp_path)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo any sink installed by a test and reopen the one-time guard."""
    root = logging.getLogger()
    saved_level = root.level
    yield
    handle = initializer.current_handle()
    if handle is not None:
        root.removeHandler(handle.handler)
        for name in handle.level_filter.loggers:
            logging.getLogger(name).setLevel(logging.NOTSET)
    initializer._guard._handle = None
    root.setLevel(saved_level)


@pytest.fixture
def fixed_clock() -> Clock:
    """Clock that always returns FIXED_TIME."""
    return lambda: FIXED_TIME


@pytest.fixture
def service() -> ServiceIdentity:
    """Sample service identity."""
    return ServiceIdentity(name="test", version="0.0.0")


@pytest.fixture
def production_settings() -> Settings:
    """Production settings that let every level through."""
    return Settings(environment="production", log_filter="trace")


def make_event(severity: Severity, message: str, **kwargs: object) -> LogEvent:
    """Event with the provenance used across the formatter tests."""
    defaults: dict[str, object] = {
        "target": "test_app",
        "source_file": "my_file.py",
        "source_line": 1337,
        "module_path": "my_module",
    }
    defaults.update(kwargs)
    return LogEvent(severity=severity, message=message, **defaults)  # type: ignore[arg-type]


@pytest.fixture
def info_event() -> LogEvent:
    """Sample info-level event."""
    return make_event(Severity.INFO, "Info!")


@pytest.fixture
def error_event() -> LogEvent:
    """Sample error-level event."""
    return make_event(Severity.ERROR, "Error!")


@pytest.fixture
def event_factory() -> Callable[..., LogEvent]:
    """Build events sharing the sample provenance; keyword arguments override it."""
    return make_event


@pytest.fixture
def fixed_event_time() -> str:
    """eventTime rendered from FIXED_TIME."""
    return FIXED_EVENT_TIME
