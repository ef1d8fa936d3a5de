"""Service identity reported as serviceContext."""

from pydantic import BaseModel, ConfigDict, Field

from stackdriver_logger.core.config import Settings, get_settings


class ServiceIdentity(BaseModel):
    """Name and version of the emitting service.

    Only an identity with both members empty counts as absent; a partially
    filled one is still reported.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Service name")
    version: str = Field(default="", description="Service version")

    @property
    def is_empty(self) -> bool:
        return not self.name and not self.version

    @classmethod
    def from_env(cls, settings: Settings | None = None) -> "ServiceIdentity | None":
        """Resolve the identity from SERVICE_NAME / SERVICE_VERSION.

        Returns:
            The identity, or None when neither variable is set.
        """
        settings = settings or get_settings()
        identity = cls(name=settings.service_name or "", version=settings.service_version or "")
        return None if identity.is_empty else identity
