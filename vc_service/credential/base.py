"""Abstract interface for credential service implementations."""

from abc import ABC, abstractmethod
from typing import Sequence

from .models import CreateCredentialRequest, VerifiableCredential


class BaseCredentialService(ABC):
    """Abstract base class for a credential service.

    Implementations raise `CredentialServiceError` (or a subclass) on failure.
    """

    @abstractmethod
    async def create_credential(
        self, request: CreateCredentialRequest
    ) -> VerifiableCredential:
        """Issue and store a new credential.

        Args:
            request: The canonical creation request

        Returns:
            The new credential, carrying its assigned identifier

        """

    @abstractmethod
    async def get_credential(self, credential_id: str) -> VerifiableCredential:
        """Fetch a credential by its identifier.

        Raises:
            CredentialNotFoundError: If the credential is not found

        """

    @abstractmethod
    async def get_credentials_by_issuer(
        self, issuer: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials issued by an issuer."""

    @abstractmethod
    async def get_credentials_by_subject(
        self, subject: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials about a subject."""

    @abstractmethod
    async def get_credentials_by_schema(
        self, schema: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials validated against a schema."""

    @abstractmethod
    async def delete_credential(self, credential_id: str):
        """Delete a credential by its identifier.

        Raises:
            CredentialNotFoundError: If the credential is not found

        """

    def __repr__(self) -> str:
        """Return a human readable representation of this class."""
        return "<{}>".format(self.__class__.__name__)
