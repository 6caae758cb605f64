from unittest import IsolatedAsyncioTestCase

from ...storage.error import StorageError
from ...storage.in_memory import InMemoryStorage
from ...tests import mock
from ..error import CredentialNotFoundError, CredentialSchemaError, CredentialServiceError
from ..models import CREDENTIALS_CONTEXT_V1_URL, CreateCredentialRequest
from ..schema import CredentialSchemaRegistry
from ..service import RECORD_TYPE_VC, CredentialService

ISSUER = "did:example:issuer"
SUBJECT = "did:example:subject"
SCHEMA_ID = "https://example.org/schemas/person.json"


class TestCredentialService(IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.storage = InMemoryStorage()
        self.registry = CredentialSchemaRegistry()
        self.registry.register(
            {
                "$id": SCHEMA_ID,
                "type": "object",
                "properties": {"name": {"type": "string"}},
                "required": ["name"],
            }
        )
        self.service = CredentialService(self.storage, self.registry)

    def make_request(self, **kwargs):
        values = {"issuer": ISSUER, "subject": SUBJECT, "data": {"name": "Cai"}}
        values.update(kwargs)
        return CreateCredentialRequest(**values)

    async def test_create(self):
        credential = await self.service.create_credential(self.make_request())
        assert credential.id.startswith("urn:uuid:")
        assert credential.context == [CREDENTIALS_CONTEXT_V1_URL]
        assert credential.type == ["VerifiableCredential"]
        assert credential.issuer == ISSUER
        assert credential.credential_subject == {"id": SUBJECT, "name": "Cai"}
        assert credential.issuance_date.endswith("Z")
        assert credential.expiration_date is None
        assert credential.credential_schema is None

        record = await self.storage.get_record(RECORD_TYPE_VC, credential.id)
        assert record.tags == {"issuer": ISSUER, "subject": SUBJECT}

        assert await self.service.get_credential(credential.id) == credential

    async def test_create_subject_wins_over_data_id(self):
        credential = await self.service.create_credential(
            self.make_request(data={"id": "did:evil", "name": "Cai", "n": 1})
        )
        assert credential.credential_subject == {
            "id": SUBJECT,
            "name": "Cai",
            "n": 1,
        }

        record = await self.storage.get_record(RECORD_TYPE_VC, credential.id)
        assert record.tags["subject"] == SUBJECT
        assert await self.service.get_credentials_by_subject(SUBJECT) == [credential]
        assert await self.service.get_credentials_by_subject("did:evil") == []

    async def test_create_context_and_expiry(self):
        credential = await self.service.create_credential(
            self.make_request(
                context="https://example.org/context/v1",
                expiry="2030-01-01T21:23:24+02:00",
            )
        )
        assert credential.context == [
            CREDENTIALS_CONTEXT_V1_URL,
            "https://example.org/context/v1",
        ]
        assert credential.expiration_date == "2030-01-01T19:23:24Z"

    async def test_create_default_context(self):
        service = CredentialService(
            self.storage, default_context="https://example.org/default/v1"
        )
        credential = await service.create_credential(self.make_request())
        assert credential.context[-1] == "https://example.org/default/v1"

    async def test_create_bad_expiry(self):
        with self.assertRaises(CredentialServiceError):
            await self.service.create_credential(self.make_request(expiry="soon"))
        assert not self.storage.records

    async def test_create_with_schema(self):
        credential = await self.service.create_credential(
            self.make_request(json_schema=SCHEMA_ID)
        )
        assert credential.credential_schema == {
            "id": SCHEMA_ID,
            "type": "JsonSchemaValidator2018",
        }
        assert await self.service.get_credentials_by_schema(SCHEMA_ID) == [credential]

    async def test_create_schema_failures(self):
        with self.assertRaises(CredentialSchemaError):
            await self.service.create_credential(
                self.make_request(json_schema=SCHEMA_ID, data={"age": 3})
            )
        with self.assertRaises(CredentialSchemaError):
            await self.service.create_credential(
                self.make_request(json_schema="https://example.org/other.json")
            )
        assert not self.storage.records

    async def test_create_storage_error(self):
        self.storage.add_record = mock.CoroutineMock(side_effect=StorageError("x"))
        with self.assertRaises(CredentialServiceError):
            await self.service.create_credential(self.make_request())

    async def test_queries(self):
        first = await self.service.create_credential(self.make_request())
        second = await self.service.create_credential(
            self.make_request(subject="did:example:other")
        )
        third = await self.service.create_credential(
            self.make_request(issuer="did:example:other-issuer")
        )

        assert await self.service.get_credentials_by_issuer(ISSUER) == [first, second]
        assert await self.service.get_credentials_by_subject(SUBJECT) == [first, third]
        assert await self.service.get_credentials_by_subject("did:example:none") == []

    async def test_get_missing(self):
        with self.assertRaises(CredentialNotFoundError):
            await self.service.get_credential("urn:uuid:missing")

    async def test_delete(self):
        credential = await self.service.create_credential(self.make_request())
        await self.service.delete_credential(credential.id)
        with self.assertRaises(CredentialNotFoundError):
            await self.service.get_credential(credential.id)
        with self.assertRaises(CredentialNotFoundError):
            await self.service.delete_credential(credential.id)

    async def test_search_error(self):
        self.storage.find_all_records = mock.CoroutineMock(
            side_effect=StorageError("x")
        )
        with self.assertRaises(CredentialServiceError):
            await self.service.get_credentials_by_issuer(ISSUER)
