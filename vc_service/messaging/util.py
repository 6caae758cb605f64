"""Date utilities for credential documents."""

import re
from datetime import datetime, timedelta, timezone
from math import floor
from typing import Union

RFC3339_PATTERN = re.compile(
    r"^(\d{4})-(\d\d)-(\d\d)[Tt ](\d\d):(\d\d):(\d\d(?:\.\d+)?)([+-]\d\d:\d\d|[Zz])$"
)


def datetime_to_str(dt: Union[str, datetime]) -> str:
    """Convert a datetime object to an RFC3339 UTC string.

    Args:
        dt: May be a string or datetime to allow automatic conversion
    """
    if isinstance(dt, datetime):
        if dt.tzinfo:
            dt = dt.astimezone(timezone.utc)
        dt = dt.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")
    return dt


def str_to_datetime(dt: Union[str, datetime]) -> datetime:
    """Convert an RFC3339 date-time string to a UTC datetime.

    Seconds and a time zone designator are required.

    Args:
        dt: May be a string or datetime to allow automatic conversion

    Raises:
        ValueError: If the string is not an RFC3339 date-time

    """
    if isinstance(dt, str):
        match = RFC3339_PATTERN.match(dt)
        if not match:
            raise ValueError("String does not match expected time format")
        year, month, day = match[1], match[2], match[3]
        hour, minute = match[4], match[5]
        flt_second = float(match[6])
        second = floor(flt_second)
        microsecond = round((flt_second - second) * 1_000_000)
        result = datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            second,
            min(microsecond, 999_999),
            timezone.utc,
        )
        tz = match[7]
        if tz not in ("Z", "z"):
            tz_sgn = int(tz[0] + "1")
            tz_hours = int(tz[1:3])
            tz_mins = int(tz[-2:])
            if tz_hours or tz_mins:
                result = result - timedelta(minutes=tz_sgn * (tz_hours * 60 + tz_mins))
        return result
    return dt


def datetime_now() -> datetime:
    """Timestamp in UTC, truncated to seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def time_now() -> str:
    """Timestamp in RFC3339 format."""
    return datetime_to_str(datetime_now())
