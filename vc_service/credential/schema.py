"""Registry of JSON schemas that credential claims are validated against."""

import logging
from typing import Iterable, List, Mapping

import yaml
from jsonschema import Draft201909Validator
from jsonschema.exceptions import SchemaError, ValidationError

from .error import CredentialSchemaError

LOGGER = logging.getLogger(__name__)


class CredentialSchemaRegistry:
    """Hold JSON schemas by identifier and validate claims against them."""

    def __init__(self):
        """Initialize an empty registry."""
        self.cache = {}

    @property
    def schema_ids(self) -> List[str]:
        """Accessor for the registered schema identifiers."""
        return list(self.cache)

    def register(self, schema: Mapping) -> str:
        """Register a JSON schema document.

        The identifier is taken from the `$id` property, or `id` if absent.

        Returns:
            The schema identifier

        Raises:
            CredentialSchemaError: If the document has no identifier or is not
                a valid JSON schema

        """
        if not isinstance(schema, Mapping):
            raise CredentialSchemaError("Schema document must be an object")
        schema_id = schema.get("$id") or schema.get("id")
        if not schema_id or not isinstance(schema_id, str):
            raise CredentialSchemaError("Schema document has no identifier")
        try:
            Draft201909Validator.check_schema(schema)
        except SchemaError as err:
            raise CredentialSchemaError(f"Invalid JSON schema: {schema_id}") from err

        if schema_id in self.cache:
            LOGGER.warning("Replacing registered schema: %s", schema_id)
        self.cache[schema_id] = Draft201909Validator(
            dict(schema), format_checker=Draft201909Validator.FORMAT_CHECKER
        )
        LOGGER.debug("Registered schema: %s", schema_id)
        return schema_id

    def load_file(self, path: str) -> str:
        """Load and register a JSON or YAML schema file."""
        try:
            with open(path, "r") as stream:
                schema = yaml.safe_load(stream)
        except (OSError, yaml.YAMLError) as err:
            raise CredentialSchemaError(f"Could not load schema file: {path}") from err
        return self.register(schema)

    def load_files(self, paths: Iterable[str]) -> List[str]:
        """Load and register several schema files."""
        return [self.load_file(path) for path in paths or ()]

    def get_validator(self, schema_id: str) -> Draft201909Validator:
        """Fetch the validator for a registered schema.

        Raises:
            CredentialSchemaError: If the schema is not registered

        """
        validator = self.cache.get(schema_id)
        if not validator:
            raise CredentialSchemaError(f"Unknown schema: {schema_id}")
        return validator

    def validate(self, schema_id: str, claims: Mapping):
        """Validate claims against a registered schema.

        Raises:
            CredentialSchemaError: If the schema is unknown or the claims are
                not valid under it

        """
        validator = self.get_validator(schema_id)
        errors = sorted(validator.iter_errors(claims), key=lambda e: e.json_path)
        if errors:
            raise CredentialSchemaError(
                f"Claims not valid under schema {schema_id}: "
                + self.format_validation_errors(errors)
            )

    @staticmethod
    def format_validation_errors(errors: Iterable[ValidationError]) -> str:
        """Format validation errors into one line."""
        return "; ".join(f"{error.json_path}: {error.message}" for error in errors)
