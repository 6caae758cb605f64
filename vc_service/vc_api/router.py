"""Credential request validation, dispatch and outcome mapping."""

import logging
from typing import Any, Mapping, NamedTuple, Optional, Union

from ..core.error import BaseError
from ..credential.base import BaseCredentialService
from ..messaging.models.base import BaseModel, BaseModelError
from ..utils.general import sanitize_log
from .models import (
    CreateCredentialRequest,
    CreateCredentialResponse,
    GetCredentialResponse,
    GetCredentialsResponse,
)

QUERY_PARAMS = ("issuer", "subject", "schema")


class CredentialRouterError(BaseError):
    """Base class for errors reported to credential API callers."""

    status = 500


class BadRequestError(CredentialRouterError):
    """The request was malformed or could not be satisfied as asked."""

    status = 400


class InternalError(CredentialRouterError):
    """The credential service failed while handling a well-formed request."""

    status = 500


class RouterResponse(NamedTuple):
    """Successful outcome of a router operation."""

    payload: Optional[BaseModel]
    status: int = 200


class CredentialRouter:
    """Validate credential requests and dispatch them to the credential service.

    Holds no per-call state, so one instance may serve concurrent requests.
    """

    def __init__(
        self,
        service: BaseCredentialService,
        logger: Union[logging.Logger, logging.LoggerAdapter],
    ):
        """Initialize the router.

        Args:
            service: The credential service requests are dispatched to
            logger: Logger for failures detected while routing

        """
        if service is None:
            raise ValueError("Credential service is required")
        self._service = service
        self._logger = logger

    @property
    def service(self) -> BaseCredentialService:
        """Accessor for the credential service."""
        return self._service

    def _error(self, error_cls, message: str, err: Exception = None):
        if err:
            detail = err.roll_up if isinstance(err, BaseError) else err
            self._logger.error("%s: %s", message, sanitize_log(detail))
        else:
            self._logger.warning("%s", message)
        return error_cls(message)

    async def create_credential(self, body: Any) -> RouterResponse:
        """Decode and issue a credential creation request.

        Returns:
            201 with the created credential

        Raises:
            BadRequestError: If the body is not a valid creation request
            InternalError: If the credential service fails

        """
        if not isinstance(body, Mapping):
            raise self._error(BadRequestError, "invalid create credential request")
        try:
            request = CreateCredentialRequest.deserialize(body)
        except BaseModelError as err:
            raise self._error(
                BadRequestError, "invalid create credential request", err
            ) from err

        try:
            credential = await self._service.create_credential(
                request.to_service_request()
            )
        except BaseError as err:
            raise self._error(
                InternalError, "could not create credential", err
            ) from err

        return RouterResponse(CreateCredentialResponse(credential=credential), 201)

    async def get_credential(self, credential_id: Optional[str]) -> RouterResponse:
        """Fetch a credential by identifier.

        Returns:
            200 with the identifier and the credential

        Raises:
            BadRequestError: If the identifier is empty or the lookup fails

        """
        if not credential_id:
            raise self._error(
                BadRequestError, "cannot get credential without ID parameter"
            )

        try:
            credential = await self._service.get_credential(credential_id)
        except BaseError as err:
            raise self._error(
                BadRequestError,
                f"could not get credential with id: {sanitize_log(credential_id)}",
                err,
            ) from err

        return RouterResponse(
            GetCredentialResponse(id=credential.id, credential=credential)
        )

    async def get_credentials(
        self,
        issuer: Optional[str] = None,
        subject: Optional[str] = None,
        schema: Optional[str] = None,
    ) -> RouterResponse:
        """Fetch the credentials matching exactly one filter.

        Empty filter values count as absent.

        Returns:
            200 with the matching credentials in service order

        Raises:
            BadRequestError: If zero or several filters are given
            InternalError: If the credential service fails

        """
        filters = {"issuer": issuer, "subject": subject, "schema": schema}
        active = [name for name in QUERY_PARAMS if filters[name]]
        if len(active) != 1:
            raise self._error(
                BadRequestError,
                "must use one of the following query parameters: "
                + ", ".join(QUERY_PARAMS),
            )

        dimension = active[0]
        value = filters[dimension]
        lookup = {
            "issuer": self._service.get_credentials_by_issuer,
            "subject": self._service.get_credentials_by_subject,
            "schema": self._service.get_credentials_by_schema,
        }[dimension]
        try:
            credentials = await lookup(value)
        except BaseError as err:
            raise self._error(
                InternalError,
                f"could not get credentials for {dimension}: {sanitize_log(value)}",
                err,
            ) from err

        return RouterResponse(GetCredentialsResponse(credentials=credentials))

    async def delete_credential(self, credential_id: Optional[str]) -> RouterResponse:
        """Delete a credential by identifier.

        Returns:
            200 with no payload

        Raises:
            BadRequestError: If the identifier is empty
            InternalError: If the credential service fails

        """
        if not credential_id:
            raise self._error(
                BadRequestError, "cannot delete credential without ID parameter"
            )

        try:
            await self._service.delete_credential(credential_id)
        except BaseError as err:
            raise self._error(
                InternalError,
                f"could not delete credential with id: {sanitize_log(credential_id)}",
                err,
            ) from err

        return RouterResponse(None)
