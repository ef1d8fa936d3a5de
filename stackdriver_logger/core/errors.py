"""Initialization errors.

Formatting itself never fails; only installing the sink can.
"""


class LoggingInitError(Exception):
    """Base class for logger initialization failures."""


class LoggerAlreadyInitialized(LoggingInitError):
    """Raised when a second sink install is attempted in the same process."""

    def __init__(self, message: str = "A logger has already been initialized") -> None:
        super().__init__(message)


class SinkInstallFailure(LoggingInitError):
    """Raised when the sink could not be built or installed."""


class ManifestError(Exception):
    """Raised when a pyproject.toml manifest cannot provide a name and version."""


__all__ = [
    "LoggerAlreadyInitialized",
    "LoggingInitError",
    "ManifestError",
    "SinkInstallFailure",
]
