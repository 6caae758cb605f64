"""Validators for schema fields."""

import math
from numbers import Number

from marshmallow.exceptions import ValidationError
from marshmallow.fields import Field
from marshmallow.validate import Regexp


class ClaimValueField(Field):
    """Claim value field for Marshmallow.

    Accepts a string, number, boolean, mapping of string to claim value, or
    list of claim values, nested to any depth. Mappings keep their key order.
    """

    default_error_messages = {
        "invalid": "Claim value must be a string, number, boolean, object or array",
        "invalid_key": "Claim names must be strings",
        "invalid_number": "Claim numbers must be finite",
    }

    def _deserialize(self, value, attr, data, **kwargs):
        return self._check(value)

    def _check(self, value):
        if isinstance(value, (str, bool)):
            return value
        if isinstance(value, Number):
            if isinstance(value, float) and not math.isfinite(value):
                raise self.make_error("invalid_number")
            return value
        if isinstance(value, dict):
            checked = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise self.make_error("invalid_key")
                checked[key] = self._check(item)
            return checked
        if isinstance(value, list):
            return [self._check(item) for item in value]
        raise self.make_error("invalid")


def non_empty_mapping(value):
    """Require at least one entry in a mapping."""
    if not value:
        raise ValidationError("Must contain at least one claim")


class RFC3339DateTime(Regexp):
    """Validate value against RFC3339 datetime format."""

    EXAMPLE = "2030-01-01T19:23:24Z"
    PATTERN = (
        r"^([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt ]([0-9]{2}):([0-9]{2}):"
        r"([0-9]{2})(\.[0-9]+)?([Zz]|([+-])([0-9]{2}):([0-9]{2}))$"
    )

    def __init__(self):
        """Initialize the instance."""

        super().__init__(
            RFC3339DateTime.PATTERN,
            error="Value {input} is not a date in valid format",
        )


RFC3339_DATETIME_VALIDATE = RFC3339DateTime()
RFC3339_DATETIME_EXAMPLE = RFC3339DateTime.EXAMPLE

GENERIC_DID_EXAMPLE = "did:key:z6MkpTHR8VNsBxYAAWHut2Geadd9jSwuBV8xRoAnwWsdvktH"
CREDENTIAL_ID_EXAMPLE = "urn:uuid:3978344f-8596-4c3a-a978-8fcaba3903c5"

JSON_SCHEMA_ID_EXAMPLE = "https://example.org/schemas/university-degree.json"
