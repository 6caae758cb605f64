"""Credential API routes."""

import logging

from aiohttp import web
from aiohttp_apispec import (
    docs,
    match_info_schema,
    querystring_schema,
    request_schema,
    response_schema,
)

from ..admin.request_context import AdminRequestContext
from ..utils.general import sanitize_log
from .models import (
    CreateCredentialRequestSchema,
    CreateCredentialResponseSchema,
    CredentialIdMatchInfoSchema,
    CredentialsQueryStringSchema,
    DeleteCredentialResponseSchema,
    GetCredentialResponseSchema,
    GetCredentialsResponseSchema,
)
from .router import BadRequestError, CredentialRouter, CredentialRouterError

LOGGER = logging.getLogger(__name__)


def credential_router(request: web.BaseRequest, operation: str) -> CredentialRouter:
    """Build a router for one request, logging under the operation name."""
    context: AdminRequestContext = request["context"]
    logger = logging.LoggerAdapter(LOGGER, {"operation": operation})
    return CredentialRouter(context.credential_service, logger)


def router_error_response(err: CredentialRouterError) -> web.HTTPException:
    """Map a router error onto an HTTP error response."""
    reason = sanitize_log(err.roll_up)
    if isinstance(err, BadRequestError):
        return web.HTTPBadRequest(reason=reason)
    return web.HTTPInternalServerError(reason=reason)


def json_response(result) -> web.Response:
    """Write a router result as JSON, or an empty body when there is no payload."""
    if result.payload is None:
        return web.Response(status=result.status)
    return web.json_response(result.payload.serialize(), status=result.status)


@docs(tags=["credentials"], summary="Create a credential")
@request_schema(CreateCredentialRequestSchema())
@response_schema(CreateCredentialResponseSchema(), 201, description="")
async def create_credential(request: web.BaseRequest):
    """Request handler for creating a credential.

    Args:
        request: aiohttp request object

    Returns:
        The created credential

    """
    router = credential_router(request, "create_credential")
    try:
        body = await request.json()
    except ValueError:
        body = None

    try:
        result = await router.create_credential(body)
    except CredentialRouterError as err:
        raise router_error_response(err) from err

    return json_response(result)


@docs(tags=["credentials"], summary="Fetch a credential by identifier")
@match_info_schema(CredentialIdMatchInfoSchema())
@response_schema(GetCredentialResponseSchema(), 200, description="")
async def get_credential(request: web.BaseRequest):
    """Request handler for fetching a credential.

    Args:
        request: aiohttp request object

    Returns:
        The credential and its identifier

    """
    router = credential_router(request, "get_credential")
    try:
        result = await router.get_credential(request.match_info.get("credential_id"))
    except CredentialRouterError as err:
        raise router_error_response(err) from err

    return json_response(result)


@docs(tags=["credentials"], summary="Query credentials by issuer, subject or schema")
@querystring_schema(CredentialsQueryStringSchema())
@response_schema(GetCredentialsResponseSchema(), 200, description="")
async def get_credentials(request: web.BaseRequest):
    """Request handler for querying credentials.

    Args:
        request: aiohttp request object

    Returns:
        The credentials matching the one filter given

    """
    router = credential_router(request, "get_credentials")
    try:
        result = await router.get_credentials(
            issuer=request.query.get("issuer"),
            subject=request.query.get("subject"),
            schema=request.query.get("schema"),
        )
    except CredentialRouterError as err:
        raise router_error_response(err) from err

    return json_response(result)


@docs(tags=["credentials"], summary="Delete a credential")
@match_info_schema(CredentialIdMatchInfoSchema())
@response_schema(DeleteCredentialResponseSchema(), 200, description="Empty body")
async def delete_credential(request: web.BaseRequest):
    """Request handler for deleting a credential.

    Args:
        request: aiohttp request object

    """
    router = credential_router(request, "delete_credential")
    try:
        result = await router.delete_credential(request.match_info.get("credential_id"))
    except CredentialRouterError as err:
        raise router_error_response(err) from err

    return json_response(result)


async def register(app: web.Application):
    """Register routes."""

    app.add_routes(
        [
            web.put("/credentials", create_credential),
            web.get("/credentials", get_credentials, allow_head=False),
            web.get("/credentials/{credential_id}", get_credential, allow_head=False),
            web.delete("/credentials/{credential_id}", delete_credential),
        ]
    )


def post_process_routes(app: web.Application):
    """Amend swagger API."""

    # Add top-level tags description
    if "tags" not in app._state["swagger_dict"]:
        app._state["swagger_dict"]["tags"] = []
    app._state["swagger_dict"]["tags"].append(
        {
            "name": "credentials",
            "description": "Issue, fetch, query and delete verifiable credentials",
            "externalDocs": {
                "description": "W3C data model",
                "url": "https://www.w3.org/TR/vc-data-model/",
            },
        }
    )
