import logging
from unittest import IsolatedAsyncioTestCase

from ...credential.error import CredentialNotFoundError, CredentialServiceError
from ...credential.in_memory import InMemoryCredentialService
from ...tests import mock
from ..models import CreateCredentialResponse, GetCredentialsResponse
from ..router import BadRequestError, CredentialRouter, InternalError

QUERY_MESSAGE = (
    "must use one of the following query parameters: issuer, subject, schema"
)


class TestCredentialRouter(IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.service = InMemoryCredentialService()
        self.logger = mock.MagicMock(logging.Logger)
        self.router = CredentialRouter(self.service, self.logger)

    def test_service_required(self):
        with self.assertRaises(ValueError):
            CredentialRouter(None, self.logger)

    async def test_create(self):
        result = await self.router.create_credential(
            {"issuer": "did:a", "subject": "did:b", "data": {"name": "x"}}
        )
        assert result.status == 201
        assert isinstance(result.payload, CreateCredentialResponse)
        credential = result.payload.credential
        assert credential is self.service.credentials[credential.id]
        assert credential.issuer == "did:a"
        assert credential.credential_subject == {"id": "did:b", "name": "x"}

        body = result.payload.serialize()
        assert body["credential"]["id"] == credential.id
        assert body["credential"]["credentialSubject"]["name"] == "x"

    async def test_create_translates_request(self):
        service = mock.mock_credential_service()
        router = CredentialRouter(service, self.logger)
        await router.create_credential(
            {
                "issuer": "did:a",
                "subject": "did:b",
                "@context": "https://example.org/ctx/v1",
                "schema": "https://example.org/schemas/s.json",
                "data": {"name": "x", "nested": {"list": [1, True]}},
                "expiry": "2030-01-01T00:00:00Z",
            }
        )
        service.create_credential.assert_awaited_once()
        request = service.create_credential.call_args.args[0]
        assert request.issuer == "did:a"
        assert request.subject == "did:b"
        assert request.context == "https://example.org/ctx/v1"
        assert request.json_schema == "https://example.org/schemas/s.json"
        assert request.data == {"name": "x", "nested": {"list": [1, True]}}
        assert request.expiry == "2030-01-01T00:00:00Z"

    async def test_create_echoes_service_result(self):
        service = mock.mock_credential_service()
        router = CredentialRouter(service, self.logger)
        result = await router.create_credential(
            {"issuer": "did:a", "subject": "did:b", "data": {"name": "x"}}
        )
        assert result.payload.credential is service.create_credential.return_value

    async def test_create_invalid(self):
        service = mock.mock_credential_service()
        router = CredentialRouter(service, self.logger)
        for body in (
            {"subject": "did:b", "data": {"name": "x"}},
            {"issuer": "did:a", "data": {"name": "x"}},
            {"issuer": "did:a", "subject": "did:b"},
            {"issuer": "", "subject": "did:b", "data": {"name": "x"}},
            {"issuer": "did:a", "subject": "did:b", "data": {}},
            {"issuer": "did:a", "subject": "did:b", "data": {"name": None}},
            {"issuer": "did:a", "subject": "did:b", "data": ["name"]},
            ["not", "an", "object"],
            None,
        ):
            with self.assertRaises(BadRequestError) as exc:
                await router.create_credential(body)
            assert exc.exception.message == "invalid create credential request"
            assert exc.exception.status == 400
        service.create_credential.assert_not_called()

    async def test_create_service_failure(self):
        service = mock.mock_credential_service()
        service.create_credential.side_effect = CredentialServiceError("boom")
        router = CredentialRouter(service, self.logger)
        with self.assertRaises(InternalError) as exc:
            await router.create_credential(
                {"issuer": "did:a", "subject": "did:b", "data": {"name": "x"}}
            )
        assert exc.exception.message == "could not create credential"
        assert exc.exception.status == 500
        assert isinstance(exc.exception.__cause__, CredentialServiceError)
        assert "boom" in exc.exception.roll_up
        self.logger.error.assert_called_once()

    async def test_get(self):
        created = await self.router.create_credential(
            {"issuer": "did:a", "subject": "did:b", "data": {"name": "x"}}
        )
        credential = created.payload.credential
        result = await self.router.get_credential(credential.id)
        assert result.status == 200
        assert result.payload.id == credential.id
        assert result.payload.credential is credential
        assert result.payload.serialize()["id"] == credential.id

    async def test_get_without_id(self):
        service = mock.mock_credential_service()
        router = CredentialRouter(service, self.logger)
        for credential_id in ("", None):
            with self.assertRaises(BadRequestError) as exc:
                await router.get_credential(credential_id)
            assert exc.exception.message == "cannot get credential without ID parameter"
        service.get_credential.assert_not_called()

    async def test_get_not_found(self):
        with self.assertRaises(BadRequestError) as exc:
            await self.router.get_credential("cred-1\nforged")
        assert exc.exception.message == "could not get credential with id: cred-1forged"
        assert isinstance(exc.exception.__cause__, CredentialNotFoundError)

    async def test_query_filter_count(self):
        service = mock.mock_credential_service()
        router = CredentialRouter(service, self.logger)
        for filters in (
            {},
            {"issuer": "did:a", "subject": "did:b"},
            {"issuer": "did:a", "schema": "s"},
            {"subject": "did:b", "schema": "s"},
            {"issuer": "did:a", "subject": "did:b", "schema": "s"},
            {"issuer": "", "subject": ""},
        ):
            with self.assertRaises(BadRequestError) as exc:
                await router.get_credentials(**filters)
            assert exc.exception.message == QUERY_MESSAGE
        service.get_credentials_by_issuer.assert_not_called()
        service.get_credentials_by_subject.assert_not_called()
        service.get_credentials_by_schema.assert_not_called()

    async def test_query_dispatch(self):
        for dimension in ("issuer", "subject", "schema"):
            service = mock.mock_credential_service()
            router = CredentialRouter(service, self.logger)
            lookup = getattr(service, f"get_credentials_by_{dimension}")
            lookup.return_value = []

            # an empty companion filter counts as absent
            filters = {"issuer": "", dimension: "value"}
            result = await router.get_credentials(**filters)

            assert result.status == 200
            assert isinstance(result.payload, GetCredentialsResponse)
            lookup.assert_awaited_once_with("value")
            for other in ("issuer", "subject", "schema"):
                if other != dimension:
                    getattr(service, f"get_credentials_by_{other}").assert_not_called()

    async def test_query_order(self):
        ids = []
        for subject in ("did:1", "did:2", "did:3"):
            created = await self.router.create_credential(
                {"issuer": "did:a", "subject": subject, "data": {"n": 1}}
            )
            ids.append(created.payload.credential.id)
        result = await self.router.get_credentials(issuer="did:a")
        assert [c.id for c in result.payload.credentials] == ids
        assert result.payload.serialize()["credentials"][0]["id"] == ids[0]

        result = await self.router.get_credentials(subject="did:none")
        assert result.payload.serialize() == {"credentials": []}

    async def test_query_by_subject_ignores_data_id(self):
        created = await self.router.create_credential(
            {"issuer": "did:a", "subject": "did:b", "data": {"id": "did:evil", "n": 1}}
        )
        credential = created.payload.credential
        assert credential.credential_subject["id"] == "did:b"

        result = await self.router.get_credentials(subject="did:b")
        assert [c.id for c in result.payload.credentials] == [credential.id]
        result = await self.router.get_credentials(subject="did:evil")
        assert result.payload.credentials == []

    async def test_query_service_failure(self):
        service = mock.mock_credential_service()
        service.get_credentials_by_subject.side_effect = CredentialServiceError("x")
        router = CredentialRouter(service, self.logger)
        with self.assertRaises(InternalError) as exc:
            await router.get_credentials(subject="did:b\r\n")
        assert exc.exception.message == "could not get credentials for subject: did:b"
        args = self.logger.error.call_args[0]
        assert args == (
            "%s: %s",
            "could not get credentials for subject: did:b",
            "x",
        )

    async def test_query_service_failure_detail_sanitized(self):
        service = mock.mock_credential_service()
        service.get_credentials_by_issuer.side_effect = CredentialServiceError(
            "store down\r\nINFO forged entry\x1b[2J"
        )
        router = CredentialRouter(service, self.logger)
        with self.assertRaises(InternalError):
            await router.get_credentials(issuer="did:a\n")
        self.logger.error.assert_called_once()
        for arg in self.logger.error.call_args[0][1:]:
            assert not any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in arg)
        assert "forged entry" in self.logger.error.call_args[0][2]

    async def test_delete(self):
        created = await self.router.create_credential(
            {"issuer": "did:a", "subject": "did:b", "data": {"name": "x"}}
        )
        credential_id = created.payload.credential.id
        result = await self.router.delete_credential(credential_id)
        assert result.status == 200
        assert result.payload is None
        assert credential_id not in self.service.credentials

    async def test_delete_without_id(self):
        service = mock.mock_credential_service()
        router = CredentialRouter(service, self.logger)
        with self.assertRaises(BadRequestError) as exc:
            await router.delete_credential("")
        assert exc.exception.message == "cannot delete credential without ID parameter"
        service.delete_credential.assert_not_called()

    async def test_delete_service_failure(self):
        with self.assertRaises(InternalError) as exc:
            await self.router.delete_credential("cred-1")
        assert exc.exception.message == "could not delete credential with id: cred-1"
        assert exc.exception.status == 500

    async def test_delete_success_with_mock(self):
        service = mock.mock_credential_service(delete_credential=None)
        router = CredentialRouter(service, self.logger)
        result = await router.delete_credential("cred-1")
        assert result.status == 200
        assert result.payload is None
        service.delete_credential.assert_awaited_once_with("cred-1")
