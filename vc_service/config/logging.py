"""Utilities related to logging."""

import io
import logging
from contextvars import ContextVar
from importlib import resources
from logging.config import dictConfig, fileConfig
from typing import Sequence

import yaml
from pythonjsonlogger import jsonlogger

from ..version import __version__
from .banner import Banner

DEFAULT_LOGGING_CONFIG_PATH = "vc_service.config:default_logging_config.ini"
LOG_FORMAT_JSON = "%(asctime)s %(request_id)s %(levelname)s %(name)s %(message)s"

context_request_id: ContextVar[str] = ContextVar("context_request_id")


class RequestContextFilter(logging.Filter):
    """Logging filter stamping records with the contextual request id."""

    def filter(self, record):
        """Add the request id of the current task to the record."""
        try:
            record.request_id = context_request_id.get()
        except LookupError:
            record.request_id = None
        return True


def load_resource(path: str, encoding: str = None):
    """Open a resource file located in a python package or the local filesystem.

    Args:
        path: The resource path in the form of `dir/file` or `package:dir/file`
        encoding: Text encoding; a binary stream is returned when omitted
    Returns:
        A file-like object representing the resource, or None if not found
    """
    components = path.rsplit(":", 1)
    try:
        if len(components) == 1:
            # Local filesystem resource
            return open(components[0], encoding=encoding)
        else:
            # Package resource
            package, resource = components
            bstream = resources.files(package).joinpath(resource).open("rb")
            if encoding:
                return io.TextIOWrapper(bstream, encoding=encoding)
            return bstream
    except (IOError, ModuleNotFoundError):
        return None


class LoggingConfigurator:
    """Utility class used to configure logging and print an informative start banner."""

    default_config_path = DEFAULT_LOGGING_CONFIG_PATH

    @classmethod
    def configure(
        cls,
        log_config_path: str = None,
        log_level: str = None,
        log_file: str = None,
        log_json: bool = False,
    ):
        """Configure logger.

        :param log_config_path: str: (Default value = None) Optional path to
            custom logging config

        :param log_level: str: (Default value = None)

        :param log_file: str: (Default value = None) Optional file name to write logs to

        :param log_json: bool: (Default value = False) Format records as JSON
        """
        cls._setup_log_config_file(log_config_path or cls.default_config_path)

        # Set custom file handler
        if log_file:
            logging.root.handlers.append(
                logging.FileHandler(log_file, encoding="utf-8")
            )

        request_filter = RequestContextFilter()
        for handler in logging.root.handlers:
            handler.addFilter(request_filter)
            if log_json:
                handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT_JSON))

        # Set custom log level
        if log_level:
            logging.root.setLevel(log_level.upper())

    @classmethod
    def _setup_log_config_file(cls, log_config_path: str):
        log_config, is_dict_config = cls._load_log_config(log_config_path)

        if not log_config:
            logging.basicConfig(level=logging.WARNING)
            logging.root.warning(f"Logging config file not found: {log_config_path}")
        elif is_dict_config:
            dictConfig(log_config)
        else:
            with log_config:
                fileConfig(log_config, disable_existing_loggers=False)

    @classmethod
    def _load_log_config(cls, log_config_path: str):
        if log_config_path.endswith((".yml", ".yaml")):
            with open(log_config_path, "r") as stream:
                return yaml.safe_load(stream), True
        return load_resource(log_config_path, "utf-8"), False

    @classmethod
    def print_banner(
        cls,
        label: str,
        admin_server=None,
        schema_ids: Sequence[str] = None,
        banner_length=40,
        border_character=":",
    ):
        """Print a startup banner describing the configuration.

        Args:
            label: Service label
            admin_server: Admin server info
            schema_ids: Identifiers of the registered credential schemas
            banner_length: (Default value = 40) Length of the banner
            border_character: (Default value = ":") Character to use in banner
            border
        """
        banner = Banner(border=border_character, length=banner_length)
        banner.add_title(label or "VC Service")
        banner.add_section(
            "Credential API",
            [f"http://{admin_server.host}:{admin_server.port}"]
            if admin_server
            else ["not enabled"],
        )
        banner.add_section(
            "Credential Schemas", list(schema_ids) if schema_ids else ["none registered"]
        )
        banner.add_version(__version__)
        banner.print()
        print()
        print("Listening...")
        print()
