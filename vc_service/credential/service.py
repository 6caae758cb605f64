"""Storage-backed credential service."""

import logging
from typing import Sequence
from uuid import uuid4

from ..messaging.models.base import BaseModelError
from ..messaging.util import datetime_to_str, str_to_datetime, time_now
from ..storage.base import BaseStorage
from ..storage.error import StorageError, StorageNotFoundError
from ..storage.record import StorageRecord
from .base import BaseCredentialService
from .error import CredentialNotFoundError, CredentialServiceError
from .models import (
    CREDENTIALS_CONTEXT_V1_URL,
    JSON_SCHEMA_VALIDATOR_TYPE,
    CreateCredentialRequest,
    VerifiableCredential,
)
from .schema import CredentialSchemaRegistry

LOGGER = logging.getLogger(__name__)

RECORD_TYPE_VC = "verifiable_credential"


class CredentialService(BaseCredentialService):
    """Issue credentials and keep them in a `BaseStorage` instance."""

    def __init__(
        self,
        storage: BaseStorage,
        schema_registry: CredentialSchemaRegistry = None,
        default_context: str = None,
    ):
        """Initialize the credential service.

        Args:
            storage: Storage for issued credentials
            schema_registry: Schemas that claims may be validated against
            default_context: Context added when a request names none

        """
        self._storage = storage
        self._schema_registry = schema_registry or CredentialSchemaRegistry()
        self._default_context = default_context

    @property
    def storage(self) -> BaseStorage:
        """Accessor for the credential storage."""
        return self._storage

    @property
    def schema_registry(self) -> CredentialSchemaRegistry:
        """Accessor for the schema registry."""
        return self._schema_registry

    def build_credential(self, request: CreateCredentialRequest) -> VerifiableCredential:
        """Build a credential document from a creation request.

        Raises:
            CredentialServiceError: If the expiry is not an RFC3339 date-time
            CredentialSchemaError: If the claims are not valid under the schema

        """
        context = [CREDENTIALS_CONTEXT_V1_URL]
        requested = request.context or self._default_context
        if requested and requested not in context:
            context.append(requested)

        expiration_date = None
        if request.expiry:
            try:
                expiration_date = datetime_to_str(str_to_datetime(request.expiry))
            except ValueError as err:
                raise CredentialServiceError(
                    "Expiry is not an RFC3339 date-time"
                ) from err

        credential_schema = None
        if request.json_schema:
            self._schema_registry.validate(request.json_schema, request.data)
            credential_schema = {
                "id": request.json_schema,
                "type": JSON_SCHEMA_VALIDATOR_TYPE,
            }

        return VerifiableCredential(
            context=context,
            id=f"urn:uuid:{uuid4()}",
            issuer=request.issuer,
            issuance_date=time_now(),
            expiration_date=expiration_date,
            credential_subject={**request.data, "id": request.subject},
            credential_schema=credential_schema,
        )

    async def create_credential(
        self, request: CreateCredentialRequest
    ) -> VerifiableCredential:
        """Issue and store a new credential."""
        credential = self.build_credential(request)
        tags = {"issuer": credential.issuer, "subject": credential.subject_id}
        if credential.schema_id:
            tags["schema"] = credential.schema_id
        record = StorageRecord(
            type=RECORD_TYPE_VC,
            value=credential.to_json(),
            tags=tags,
            id=credential.id,
        )
        try:
            await self._storage.add_record(record)
        except StorageError as err:
            raise CredentialServiceError("Could not store credential") from err
        LOGGER.debug("Stored credential %s", credential.id)
        return credential

    async def get_credential(self, credential_id: str) -> VerifiableCredential:
        """Fetch a credential by its identifier."""
        try:
            record = await self._storage.get_record(RECORD_TYPE_VC, credential_id)
        except StorageNotFoundError as err:
            raise CredentialNotFoundError("Credential not found") from err
        except StorageError as err:
            raise CredentialServiceError("Could not fetch credential") from err
        return self._record_to_credential(record)

    async def get_credentials_by_issuer(
        self, issuer: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials issued by an issuer."""
        return await self._search({"issuer": issuer})

    async def get_credentials_by_subject(
        self, subject: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials about a subject."""
        return await self._search({"subject": subject})

    async def get_credentials_by_schema(
        self, schema: str
    ) -> Sequence[VerifiableCredential]:
        """Fetch all credentials validated against a schema."""
        return await self._search({"schema": schema})

    async def delete_credential(self, credential_id: str):
        """Delete a credential by its identifier."""
        try:
            record = await self._storage.get_record(RECORD_TYPE_VC, credential_id)
            await self._storage.delete_record(record)
        except StorageNotFoundError as err:
            raise CredentialNotFoundError("Credential not found") from err
        except StorageError as err:
            raise CredentialServiceError("Could not delete credential") from err
        LOGGER.debug("Deleted credential %s", credential_id)

    async def _search(self, tag_query: dict) -> Sequence[VerifiableCredential]:
        try:
            records = await self._storage.find_all_records(RECORD_TYPE_VC, tag_query)
        except StorageError as err:
            raise CredentialServiceError("Could not search credentials") from err
        return [self._record_to_credential(record) for record in records]

    @staticmethod
    def _record_to_credential(record: StorageRecord) -> VerifiableCredential:
        try:
            return VerifiableCredential.from_json(record.value)
        except BaseModelError as err:
            raise CredentialServiceError(
                "Stored credential could not be read"
            ) from err
