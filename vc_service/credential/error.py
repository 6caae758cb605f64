"""Credential service exceptions."""

from ..core.error import BaseError


class CredentialServiceError(BaseError):
    """Base class for credential service errors."""


class CredentialNotFoundError(CredentialServiceError):
    """Credential not found."""


class CredentialSchemaError(CredentialServiceError):
    """Credential schema unknown, or claims not valid under it."""
