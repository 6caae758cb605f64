"""Command line option parsing."""

import abc
from typing import Type

from configargparse import ArgumentParser, Namespace, YAMLConfigFileParser

from .error import ArgsParseError
from .util import BoundedInt

CAT_START = "start"


class ArgumentGroup(abc.ABC):
    """A class representing a group of related command line arguments."""

    GROUP_NAME = None

    @abc.abstractmethod
    def add_arguments(self, parser: ArgumentParser):
        """Add arguments to the provided argument parser."""

    @abc.abstractmethod
    def get_settings(self, args: Namespace) -> dict:
        """Extract settings from the parsed arguments."""


class group:
    """Decorator for registering argument groups."""

    _registered = []

    def __init__(self, *categories):
        """Initialize the decorator."""
        self.categories = tuple(categories)

    def __call__(self, group_cls: ArgumentGroup):
        """Register a class in the given categories."""
        setattr(group_cls, "CATEGORIES", self.categories)
        self._registered.append((self.categories, group_cls))
        return group_cls

    @classmethod
    def get_registered(cls, category: str = None):
        """Fetch the set of registered classes in a category."""
        return (
            grp
            for (cats, grp) in cls._registered
            if category is None or category in cats
        )


def create_argument_parser(*, prog: str = None):
    """Create an instance of an arg parser, force yaml format for external config."""
    return ArgumentParser(config_file_parser_class=YAMLConfigFileParser, prog=prog)


def load_argument_groups(parser: ArgumentParser, *groups: Type[ArgumentGroup]):
    """Load a set of argument groups into a parser.

    Returns:
        A callable to convert loaded arguments into a settings dictionary

    """
    group_inst = []
    for group in groups:
        g_parser = parser.add_argument_group(group.GROUP_NAME)
        inst = group()
        inst.add_arguments(g_parser)
        group_inst.append(inst)

    def get_settings(args: Namespace):
        settings = {}
        try:
            for group in group_inst:
                settings.update(group.get_settings(args))
        except ArgsParseError as e:
            parser.print_help()
            raise e
        return settings

    return get_settings


@group(CAT_START)
class GeneralGroup(ArgumentGroup):
    """General settings."""

    GROUP_NAME = "General"

    def add_arguments(self, parser: ArgumentParser):
        """Add general command line arguments to the parser."""
        parser.add_argument(
            "--arg-file",
            is_config_file=True,
            help=(
                "Load vc-service arguments from the specified file.  Note that "
                "this file *must* be in YAML format."
            ),
        )
        parser.add_argument(
            "-l",
            "--label",
            type=str,
            metavar="<label>",
            env_var="VCS_LABEL",
            help="Specifies the label for this service, shown in the API docs.",
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract general settings."""
        settings = {}
        if args.label:
            settings["default_label"] = args.label
        return settings


@group(CAT_START)
class AdminGroup(ArgumentGroup):
    """Admin server settings."""

    GROUP_NAME = "Admin"

    def add_arguments(self, parser: ArgumentParser):
        """Add admin-specific command line arguments to the parser."""
        parser.add_argument(
            "--admin",
            type=str,
            nargs=2,
            metavar=("<host>", "<port>"),
            env_var="VCS_ADMIN",
            help=(
                "Specify the host and port on which to serve the credential API. "
                "Required to start the service."
            ),
        )
        parser.add_argument(
            "--admin-api-key",
            type=str,
            metavar="<api-key>",
            env_var="VCS_ADMIN_API_KEY",
            help=(
                "Protect all credential endpoints with the provided API key. "
                "API clients must pass the key in the HTTP header using "
                "'X-API-Key: <api key>'. Either this parameter or the "
                "'--admin-insecure-mode' parameter MUST be specified."
            ),
        )
        parser.add_argument(
            "--admin-insecure-mode",
            action="store_true",
            env_var="VCS_ADMIN_INSECURE_MODE",
            help=(
                "Run the web server in insecure mode. DO NOT USE FOR "
                "PRODUCTION DEPLOYMENTS. The credential API will be publicly "
                "available to anyone who has access to the interface. Either this "
                "parameter or the '--admin-api-key' parameter MUST be specified."
            ),
        )
        parser.add_argument(
            "--admin-client-max-request-size",
            default=1,
            type=BoundedInt(min=1, max=16),
            env_var="VCS_ADMIN_CLIENT_MAX_REQUEST_SIZE",
            help="Maximum client request size, in megabytes: default 1",
        )

    def get_settings(self, args: Namespace):
        """Extract admin settings."""
        settings = {}
        if args.admin:
            admin_api_key = args.admin_api_key
            admin_insecure_mode = args.admin_insecure_mode

            if (admin_api_key and admin_insecure_mode) or not (
                admin_api_key or admin_insecure_mode
            ):
                raise ArgsParseError(
                    "Either --admin-api-key or --admin-insecure-mode "
                    "must be set but not both."
                )

            settings["admin.admin_api_key"] = admin_api_key
            settings["admin.admin_insecure_mode"] = admin_insecure_mode

            settings["admin.enabled"] = True
            settings["admin.host"] = args.admin[0]
            settings["admin.port"] = args.admin[1]
            settings["admin.admin_client_max_request_size"] = (
                args.admin_client_max_request_size or 1
            )
        return settings


@group(CAT_START)
class LoggingGroup(ArgumentGroup):
    """Logging settings."""

    GROUP_NAME = "Logging"

    def add_arguments(self, parser: ArgumentParser):
        """Add logging-specific command line arguments to the parser."""
        parser.add_argument(
            "--log-config",
            dest="log_config",
            type=str,
            metavar="<path-to-config>",
            default=None,
            env_var="VCS_LOG_CONFIG",
            help="Specifies a custom logging configuration file",
        )
        parser.add_argument(
            "--log-file",
            dest="log_file",
            type=str,
            metavar="<log-file>",
            default=None,
            env_var="VCS_LOG_FILE",
            help=(
                "Overrides the output destination for the root logger (as defined "
                "by the log config file) to the named <log-file>."
            ),
        )
        parser.add_argument(
            "--log-level",
            dest="log_level",
            type=str,
            metavar="<log-level>",
            default=None,
            env_var="VCS_LOG_LEVEL",
            help=(
                "Specifies a custom logging level as one of: "
                "('debug', 'info', 'warning', 'error', 'critical')"
            ),
        )
        parser.add_argument(
            "--log-json",
            action="store_true",
            env_var="VCS_LOG_JSON",
            help="Emit log records as JSON objects on every root handler.",
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract logging settings."""
        settings = {}
        if args.log_config:
            settings["log.config"] = args.log_config
        if args.log_file:
            settings["log.file"] = args.log_file
        if args.log_level:
            settings["log.level"] = args.log_level
        if args.log_json:
            settings["log.json"] = True
        return settings


@group(CAT_START)
class CredentialGroup(ArgumentGroup):
    """Credential issuance settings."""

    GROUP_NAME = "Credential"

    def add_arguments(self, parser: ArgumentParser):
        """Add credential-specific command line arguments to the parser."""
        parser.add_argument(
            "--credential-schema",
            dest="credential_schemas",
            type=str,
            action="append",
            metavar="<path>",
            env_var="VCS_CREDENTIAL_SCHEMA",
            help=(
                "Load a JSON schema that credential data may be validated against. "
                "The file may be JSON or YAML and is registered under its '$id' "
                "(or 'id') property. May be specified multiple times."
            ),
        )
        parser.add_argument(
            "--default-context",
            type=str,
            metavar="<uri>",
            env_var="VCS_DEFAULT_CONTEXT",
            help=(
                "JSON-LD context added after the base credentials context when a "
                "creation request names none."
            ),
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract credential settings."""
        settings = {}
        if args.credential_schemas:
            settings["credential.schema_files"] = list(args.credential_schemas)
        if args.default_context:
            settings["credential.default_context"] = args.default_context
        return settings
