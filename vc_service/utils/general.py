"""Utility functions for the credential service."""

import re
from hmac import compare_digest

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f\u2028\u2029]")


def const_compare(string1, string2):
    """Compare two strings in constant time."""
    if string1 is None or string2 is None:
        return False
    return compare_digest(string1.encode(), string2.encode())


def sanitize_log(value) -> str:
    """Strip line breaks and other control characters from a caller-supplied value.

    The result is safe to embed in a log line or an error message without
    letting the caller forge additional log entries.
    """
    if value is None:
        return ""
    return CONTROL_CHARS.sub("", str(value))
