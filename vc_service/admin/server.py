"""Admin server classes."""

import asyncio
import logging
import uuid
from typing import Coroutine, Sequence

import aiohttp_cors
from aiohttp import web
from aiohttp_apispec import docs, response_schema, setup_aiohttp_apispec
from marshmallow import fields

from ..config.settings import Settings
from ..config.logging import context_request_id
from ..credential.base import BaseCredentialService
from ..messaging.models.openapi import OpenAPISchema
from ..utils.general import const_compare, sanitize_log
from ..vc_api import routes as vc_api_routes
from ..version import __version__
from .error import AdminSetupError
from .request_context import AdminRequestContext

LOGGER = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SECRET_SETTINGS = ("admin.admin_api_key",)


class AdminConfigSchema(OpenAPISchema):
    """Schema for the config endpoint."""

    config = fields.Dict(
        required=True, metadata={"description": "Configuration settings"}
    )


class AdminStatusSchema(OpenAPISchema):
    """Schema for the status endpoint."""

    version = fields.Str(metadata={"description": "Version code"})
    label = fields.Str(allow_none=True, metadata={"description": "Default label"})
    schemas = fields.List(
        fields.Str(), metadata={"description": "Registered credential schemas"}
    )


class AdminStatusLivelinessSchema(OpenAPISchema):
    """Schema for the liveliness endpoint."""

    alive = fields.Boolean(metadata={"description": "Liveliness status", "example": True})


class AdminStatusReadinessSchema(OpenAPISchema):
    """Schema for the readiness endpoint."""

    ready = fields.Boolean(metadata={"description": "Readiness status", "example": True})


@web.middleware
async def ready_middleware(request: web.BaseRequest, handler: Coroutine):
    """Only continue if application is ready to take work."""

    if str(request.rel_url).rstrip("/") in (
        "/status/live",
        "/status/ready",
    ) or request.app._state.get("ready"):
        try:
            return await handler(request)
        except (web.HTTPException, asyncio.CancelledError):
            raise
        except Exception as e:
            LOGGER.exception("Handler error with exception: %s", sanitize_log(e))
            raise

    raise web.HTTPServiceUnavailable(reason="Shutdown in progress")


@web.middleware
async def debug_middleware(request: web.BaseRequest, handler: Coroutine):
    """Show request detail in debug log."""

    if LOGGER.isEnabledFor(logging.DEBUG):
        LOGGER.debug(
            "Incoming request: %s %s", request.method, sanitize_log(request.path_qs)
        )
        LOGGER.debug("Match info: %s", sanitize_log(dict(request.match_info)))
        body = await request.text() if request.body_exists else None
        LOGGER.debug("Body: %s", sanitize_log(body))

    return await handler(request)


class AdminServer:
    """Admin HTTP server class."""

    def __init__(
        self,
        host: str,
        port: int,
        settings: Settings,
        credential_service: BaseCredentialService,
        schema_ids: Sequence[str] = None,
    ):
        """Initialize an AdminServer instance.

        Args:
            host: Host to listen on
            port: Port to listen on
            settings: The application settings
            credential_service: The credential service behind the credential routes
            schema_ids: Identifiers of the registered credential schemas

        """
        self.app = None
        self.admin_api_key = settings.get("admin.admin_api_key")
        self.admin_insecure_mode = bool(settings.get_bool("admin.admin_insecure_mode"))
        self.host = host
        self.port = port
        self.settings = settings
        self.credential_service = credential_service
        self.schema_ids = list(schema_ids or [])
        self.runner = None
        self.site = None

    async def make_application(self) -> web.Application:
        """Get the aiohttp application instance."""

        @web.middleware
        async def setup_context(request: web.Request, handler):
            request_id = sanitize_log(request.headers.get(REQUEST_ID_HEADER)) or str(
                uuid.uuid4()
            )
            token = context_request_id.set(request_id)
            try:
                request["context"] = AdminRequestContext(
                    self.credential_service,
                    settings=self.settings,
                    request_id=request_id,
                )
                try:
                    response = await handler(request)
                except web.HTTPException as err:
                    err.headers[REQUEST_ID_HEADER] = request_id
                    raise
                except Exception as err:
                    raise web.HTTPInternalServerError(
                        headers={REQUEST_ID_HEADER: request_id}
                    ) from err
                response.headers[REQUEST_ID_HEADER] = request_id
                return response
            finally:
                context_request_id.reset(token)

        middlewares = [setup_context, ready_middleware, debug_middleware]

        # admin-api-key and admin-insecure-mode are mutually exclusive and
        # required; parsing enforces it, checked again here.
        if not (self.admin_insecure_mode ^ bool(self.admin_api_key)):
            raise AdminSetupError(
                "Exactly one of admin API key or insecure mode must be configured"
            )

        def is_unprotected_path(path: str):
            return path in [
                "/api/doc",
                "/api/docs/swagger.json",
                "/favicon.ico",
                "/status/live",
                "/status/ready",
            ] or path.startswith("/static/swagger/")

        if self.admin_api_key:

            @web.middleware
            async def check_token(request: web.Request, handler):
                header_admin_api_key = request.headers.get("x-api-key")
                valid_key = const_compare(self.admin_api_key, header_admin_api_key)

                # OPTIONS preflight requests never carry the x-api-key header
                if (
                    valid_key
                    or is_unprotected_path(request.path)
                    or (request.method == "OPTIONS")
                ):
                    return await handler(request)
                else:
                    raise web.HTTPUnauthorized()

            middlewares.append(check_token)

        app = web.Application(
            middlewares=middlewares,
            client_max_size=(
                self.settings.get_int("admin.admin_client_max_request_size", default=1)
                * 1024
                * 1024
            ),
        )

        server_routes = [
            web.get("/", self.redirect_handler, allow_head=True),
            web.get("/status", self.status_handler, allow_head=False),
            web.get("/status/config", self.config_handler, allow_head=False),
            web.get("/status/live", self.liveliness_handler, allow_head=False),
            web.get("/status/ready", self.readiness_handler, allow_head=False),
        ]
        app.add_routes(server_routes)
        await vc_api_routes.register(app)

        cors = aiohttp_cors.setup(
            app,
            defaults={
                "*": aiohttp_cors.ResourceOptions(
                    allow_credentials=True,
                    expose_headers="*",
                    allow_headers="*",
                    allow_methods="*",
                )
            },
        )
        for route in app.router.routes():
            cors.add(route)

        setup_aiohttp_apispec(
            app=app,
            title=self.settings.get("default_label") or "VC Service",
            version=f"v{__version__}",
            swagger_path="/api/doc",
        )
        app.on_startup.append(self.on_startup)

        # ensure we always have status values
        app._state["ready"] = False
        app._state["alive"] = False

        return app

    async def start(self) -> None:
        """Start the webserver.

        Raises:
            AdminSetupError: If there was an error starting the webserver

        """
        self.app = await self.make_application()
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        vc_api_routes.post_process_routes(self.app)
        swagger_dict = self.app._state["swagger_dict"]
        swagger_dict.get("tags", []).sort(key=lambda t: t["name"])
        for path in sorted([p for p in swagger_dict["paths"]]):
            swagger_dict["paths"][path] = swagger_dict["paths"].pop(path)

        self.site = web.TCPSite(self.runner, host=self.host, port=self.port)

        try:
            await self.site.start()
            self.app._state["ready"] = True
            self.app._state["alive"] = True
        except OSError as err:
            raise AdminSetupError(
                "Unable to start webserver with host "
                + f"'{self.host}' and port '{self.port}'\n"
            ) from err

    async def stop(self) -> None:
        """Stop the webserver."""
        if self.app:
            self.app._state["ready"] = False
        if self.site:
            await self.site.stop()
            self.site = None
        if self.runner:
            await self.runner.cleanup()
            self.runner = None

    async def on_startup(self, app: web.Application):
        """Perform webserver startup actions."""
        if self.admin_api_key:
            swagger = app["swagger_dict"]
            swagger["securityDefinitions"] = {
                "ApiKeyHeader": {"type": "apiKey", "in": "header", "name": "X-API-KEY"}
            }
            swagger["security"] = [{"ApiKeyHeader": []}]

    @docs(tags=["server"], summary="Fetch the server configuration")
    @response_schema(AdminConfigSchema(), 200, description="")
    async def config_handler(self, request: web.BaseRequest):
        """Request handler for the server configuration.

        Args:
            request: aiohttp request object

        Returns:
            The web response

        """
        config = self.settings.to_public_dict(SECRET_SETTINGS)
        return web.json_response({"config": config})

    @docs(tags=["server"], summary="Fetch the server status")
    @response_schema(AdminStatusSchema(), 200, description="")
    async def status_handler(self, request: web.BaseRequest):
        """Request handler for the server status information.

        Args:
            request: aiohttp request object

        Returns:
            The web response

        """
        status = {"version": __version__}
        status["label"] = self.settings.get("default_label")
        status["schemas"] = self.schema_ids
        return web.json_response(status)

    async def redirect_handler(self, request: web.BaseRequest):
        """Perform redirect to documentation."""
        raise web.HTTPFound("/api/doc")

    @docs(tags=["server"], summary="Liveliness check")
    @response_schema(AdminStatusLivelinessSchema(), 200, description="")
    async def liveliness_handler(self, request: web.BaseRequest):
        """Request handler for liveliness check.

        Args:
            request: aiohttp request object

        Returns:
            The web response, always indicating True

        """
        app_live = self.app._state["alive"]
        if app_live:
            return web.json_response({"alive": app_live})
        else:
            raise web.HTTPServiceUnavailable(reason="Service not available")

    @docs(tags=["server"], summary="Readiness check")
    @response_schema(AdminStatusReadinessSchema(), 200, description="")
    async def readiness_handler(self, request: web.BaseRequest):
        """Request handler for readiness check.

        Args:
            request: aiohttp request object

        Returns:
            The web response, indicating readiness for further calls

        """
        app_ready = self.app._state["ready"] and self.app._state["alive"]
        if app_ready:
            return web.json_response({"ready": app_ready})
        else:
            raise web.HTTPServiceUnavailable(reason="Service not ready")
