"""Map source severities onto the Stackdriver severity vocabulary."""

from stackdriver_logger.schemas.events import Severity, SeverityToken

# NOTICE, CRITICAL, ALERT and EMERGENCY have no source severity pointing at them.
_LEVEL_MAP: dict[Severity, SeverityToken] = {
    Severity.ERROR: SeverityToken.ERROR,
    Severity.WARN: SeverityToken.WARNING,
    Severity.INFO: SeverityToken.INFO,
    Severity.DEBUG: SeverityToken.DEBUG,
    Severity.TRACE: SeverityToken.DEBUG,
}


def map_level(severity: Severity) -> SeverityToken:
    """Return the Stackdriver token for a source severity."""
    return _LEVEL_MAP[severity]


__all__ = ["map_level"]
