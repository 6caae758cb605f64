"""Configuration base classes."""

from abc import abstractmethod
from typing import Any, Iterator, Mapping, Optional

from ..core.error import BaseError


class ConfigError(BaseError):
    """A base exception for all configuration errors."""


class SettingsError(ConfigError):
    """The base exception raised by `BaseSettings` implementations."""


class BaseSettings(Mapping[str, Any]):
    """Read-only view of the service settings.

    Keys are dotted names grouped by concern, such as `admin.port` or
    `credential.schema_files`.
    """

    @abstractmethod
    def get_value(self, *var_names, default: Optional[Any] = None) -> Any:
        """Fetch the first defined setting among `var_names`, else `default`."""

    def get_bool(self, *var_names, default: Optional[bool] = None) -> Optional[bool]:
        """Fetch a setting as a boolean value.

        The strings "false", "False" and "0" are false.
        """
        value = self.get_value(*var_names, default=default)
        if value is None:
            return None
        return bool(value) and value not in ("false", "False", "0")

    def get_int(self, *var_names, default: Optional[int] = None) -> Optional[int]:
        """Fetch a setting as an integer value.

        Raises:
            SettingsError: If the value cannot be converted

        """
        value = self.get_value(*var_names, default=default)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError) as err:
            raise SettingsError(
                f"Setting {var_names[0]} is not an integer: {value}"
            ) from err

    def get_str(self, *var_names, default: Optional[str] = None) -> Optional[str]:
        """Fetch a setting as a string value."""
        value = self.get_value(*var_names, default=default)
        return None if value is None else str(value)

    def __getitem__(self, index):
        """Fetch as an array index."""
        if not isinstance(index, str):
            raise TypeError("Index must be a string")
        missing = object()
        result = self.get_value(index, default=missing)
        if result is missing:
            raise KeyError("Undefined index: {}".format(index))
        return result

    @abstractmethod
    def __iter__(self) -> Iterator:
        """Iterate settings keys."""

    @abstractmethod
    def __len__(self):
        """Fetch the length of the mapping."""

    def __repr__(self) -> str:
        """Provide a human readable representation of this object."""
        items = ("{}={}".format(k, self[k]) for k in self)
        return "<{}({})>".format(self.__class__.__name__, ", ".join(items))
