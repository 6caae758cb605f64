"""The Conductor.

The conductor builds the credential service and its collaborators from the
settings, then runs the admin server that exposes the credential API.

"""

import logging

from ..admin.server import AdminServer
from ..config.base import BaseSettings
from ..config.logging import LoggingConfigurator
from ..credential.base import BaseCredentialService
from ..credential.schema import CredentialSchemaRegistry
from ..credential.service import CredentialService
from ..storage.base import BaseStorage
from ..storage.in_memory import InMemoryStorage
from .error import StartupError

LOGGER = logging.getLogger(__name__)


class Conductor:
    """Conductor class.

    Class responsible for initializing and shutting down the service.

    """

    def __init__(self, settings: BaseSettings) -> None:
        """Initialize an instance of Conductor.

        Args:
            settings: The parsed service settings

        """
        self.settings = settings
        self.admin_server: AdminServer = None
        self.credential_service: BaseCredentialService = None
        self.schema_registry: CredentialSchemaRegistry = None
        self.storage: BaseStorage = None

    async def setup(self):
        """Build the credential service and the admin server."""
        if not self.settings.get("admin.enabled"):
            raise StartupError("The --admin host and port must be provided")

        self.storage = InMemoryStorage()
        self.schema_registry = CredentialSchemaRegistry()
        schema_ids = self.schema_registry.load_files(
            self.settings.get("credential.schema_files")
        )
        for schema_id in schema_ids:
            LOGGER.info("Loaded credential schema: %s", schema_id)

        self.credential_service = CredentialService(
            self.storage,
            self.schema_registry,
            default_context=self.settings.get("credential.default_context"),
        )

        try:
            self.admin_server = AdminServer(
                self.settings.get_str("admin.host", default="0.0.0.0"),
                self.settings.get_int("admin.port", default=80),
                self.settings,
                self.credential_service,
                schema_ids=schema_ids,
            )
        except Exception:
            LOGGER.exception("Unable to register admin server")
            raise

    async def start(self) -> None:
        """Start the admin server."""
        try:
            await self.admin_server.start()
        except Exception:
            LOGGER.exception("Unable to start administration API")
            raise

        LoggingConfigurator.print_banner(
            self.settings.get("default_label"),
            self.admin_server,
            self.schema_registry.schema_ids,
        )

    async def stop(self):
        """Stop the service."""
        if self.admin_server:
            await self.admin_server.stop()
