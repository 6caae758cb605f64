"""Admin request context class.

A request context provided by the admin server to admin route handlers.
"""

from typing import Optional

from ..config.base import BaseSettings
from ..config.settings import Settings
from ..credential.base import BaseCredentialService


class AdminRequestContext:
    """Context established by the admin server and passed into route handlers."""

    def __init__(
        self,
        credential_service: BaseCredentialService,
        *,
        settings: BaseSettings = None,
        request_id: Optional[str] = None,
    ):
        """Initialize an instance of AdminRequestContext."""
        self._credential_service = credential_service
        self._settings = settings if settings is not None else Settings()
        self._request_id = request_id

    @property
    def credential_service(self) -> BaseCredentialService:
        """Accessor for the credential service."""
        return self._credential_service

    @property
    def settings(self) -> BaseSettings:
        """Accessor for the context settings."""
        return self._settings

    @property
    def request_id(self) -> Optional[str]:
        """Accessor for the request identifier."""
        return self._request_id

    def __repr__(self) -> str:
        """Return a human readable representation of this class."""
        return "<{}(request_id={!r}, credential_service={!r})>".format(
            self.__class__.__name__, self._request_id, self._credential_service
        )
