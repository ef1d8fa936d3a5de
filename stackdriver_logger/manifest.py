"""Read the service identity from a pyproject.toml build manifest."""

import logging
from pathlib import Path
import tomllib

from stackdriver_logger.core.errors import ManifestError
from stackdriver_logger.schemas.service import ServiceIdentity

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "pyproject.toml"


def _read_project_key(project: dict, key: str, path: Path) -> str:
    value = project.get(key)
    if not isinstance(value, str):
        raise ManifestError(f"{path}: [project].{key} is missing or not a string")
    return value


def read_manifest(path: str | Path = DEFAULT_MANIFEST) -> ServiceIdentity:
    """Read ``[project].name`` and ``[project].version`` from a manifest.

    Args:
        path: Path to the pyproject.toml file.

    Returns:
        The identity declared by the manifest.

    Raises:
        ManifestError: If the file is missing, not valid TOML, or lacks a
            string name or version (a ``dynamic`` version counts as missing).
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Manifest is not valid TOML: {path}: {e}") from e

    project = data.get("project")
    if not isinstance(project, dict):
        raise ManifestError(f"{path}: no [project] table")

    return ServiceIdentity(
        name=_read_project_key(project, "name", path),
        version=_read_project_key(project, "version", path),
    )


def identity_from_manifest(path: str | Path = DEFAULT_MANIFEST) -> ServiceIdentity | None:
    """Like :func:`read_manifest`, but returns None instead of raising."""
    try:
        return read_manifest(path)
    except ManifestError as e:
        logger.debug("No service identity from manifest", extra={"error": str(e)})
        return None


__all__ = ["DEFAULT_MANIFEST", "identity_from_manifest", "read_manifest"]
