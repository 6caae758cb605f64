"""Common exception classes."""

import re


class BaseError(Exception):
    """Generic exception class which other exceptions should inherit from."""

    def __init__(self, *args, error_code: str = None, **kwargs):
        """Initialize a BaseError instance."""
        super().__init__(*args, **kwargs)
        self.error_code = error_code if error_code else None

    @property
    def message(self) -> str:
        """Accessor for the error message."""
        return str(self.args[0]).strip() if self.args else ""

    @property
    def roll_up(self) -> str:
        """Accessor for the messages along the `__cause__` chain, on one line.

        For display: aiohttp.web errors truncate after newline.
        """
        parts = []
        err = self
        while err:
            text = str(err.args[0]).strip() if err.args else err.__class__.__name__
            parts.append(re.sub(r"\s*\n\s*", ". ", text))
            err = err.__cause__
        return ": ".join(parts)


class StartupError(BaseError):
    """Error raised when the service cannot start with its configuration."""
