"""Settings implementation."""

from typing import Any, Iterable, Mapping

from .base import BaseSettings

MASKED_VALUE = "********"


class Settings(BaseSettings):
    """Settings collected from the command line, environment and config files."""

    def __init__(self, values: Mapping[str, Any] = None):
        """Initialize a Settings object.

        Args:
            values: An optional dictionary of settings
        """
        self._values = dict(values or {})

    def get_value(self, *var_names, default=None):
        """Fetch the first defined setting among `var_names`, else `default`."""
        for k in var_names:
            if k in self._values:
                return self._values[k]
        return default

    def __setitem__(self, var_name: str, value):
        """Add or replace a setting."""
        if not isinstance(var_name, str):
            raise TypeError("Setting name must be a string")
        if not var_name:
            raise ValueError("Setting name must be non-empty")
        self._values[var_name] = value

    def __iter__(self):
        """Iterate settings keys."""
        return iter(self._values)

    def __len__(self):
        """Fetch the length of the mapping."""
        return len(self._values)

    def __bool__(self):
        """Convert settings to a boolean."""
        return True

    def to_public_dict(self, secrets: Iterable[str] = ()) -> dict:
        """Render the settings as JSON-compatible values.

        Sequences become lists and the values of defined `secrets` are masked.
        """
        public = {}
        for k, v in self._values.items():
            if k in secrets and v:
                v = MASKED_VALUE
            elif not isinstance(v, (str, int, float, bool, type(None))):
                v = list(v)
            public[k] = v
        return public
