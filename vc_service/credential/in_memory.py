"""In-memory credential service for tests and local development."""

from typing import Sequence
from uuid import uuid4

from ..messaging.util import time_now
from .base import BaseCredentialService
from .error import CredentialNotFoundError
from .models import (
    CREDENTIALS_CONTEXT_V1_URL,
    JSON_SCHEMA_VALIDATOR_TYPE,
    CreateCredentialRequest,
    VerifiableCredential,
)


class InMemoryCredentialService(BaseCredentialService):
    """Keep credentials in a dict, performing no schema validation.

    Each operation completes without awaiting, so concurrent callers on one
    event loop always see whole credentials.
    """

    def __init__(self):
        """Initialize an empty service."""
        self.credentials = {}

    async def create_credential(
        self, request: CreateCredentialRequest
    ) -> VerifiableCredential:
        """Create and keep a new credential."""
        context = [CREDENTIALS_CONTEXT_V1_URL]
        if request.context and request.context not in context:
            context.append(request.context)
        credential = VerifiableCredential(
            context=context,
            id=f"urn:uuid:{uuid4()}",
            issuer=request.issuer,
            issuance_date=time_now(),
            expiration_date=request.expiry,
            credential_subject={**request.data, "id": request.subject},
            credential_schema=(
                {"id": request.json_schema, "type": JSON_SCHEMA_VALIDATOR_TYPE}
                if request.json_schema
                else None
            ),
        )
        self.credentials[credential.id] = credential
        return credential

    async def get_credential(self, credential_id: str) -> VerifiableCredential:
        """Fetch a credential by its identifier."""
        credential = self.credentials.get(credential_id)
        if not credential:
            raise CredentialNotFoundError("Credential not found")
        return credential

    async def get_credentials_by_issuer(
        self, issuer: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials issued by an issuer."""
        return [c for c in list(self.credentials.values()) if c.issuer == issuer]

    async def get_credentials_by_subject(
        self, subject: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials about a subject."""
        return [c for c in list(self.credentials.values()) if c.subject_id == subject]

    async def get_credentials_by_schema(
        self, schema: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials validated against a schema."""
        return [c for c in list(self.credentials.values()) if c.schema_id == schema]

    async def delete_credential(self, credential_id: str):
        """Delete a credential by its identifier."""
        if credential_id not in self.credentials:
            raise CredentialNotFoundError("Credential not found")
        del self.credentials[credential_id]
