# snsfeed/core/durations.py
import re
from datetime import timedelta

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")

_UNIT_SECONDS = {
    "ms": 0.001, "msec": 0.001, "msecs": 0.001, "millisecond": 0.001, "milliseconds": 0.001,
    "": 1, "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
    "w": 604800, "week": 604800, "weeks": 604800,
    "y": 31557600, "yr": 31557600, "yrs": 31557600, "year": 31557600, "years": 31557600,
}


def parse_duration(value: str) -> timedelta:
    """
    Converts a duration string such as "30m", "2h", "7d" or "90 seconds" to a timedelta.
    A bare number is read as seconds, unlike the JavaScript `ms` convention where a
    bare numeric string means milliseconds ("60" is one minute here, not 60ms).
    Raises ValueError for anything else.
    """
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    unit = unit.lower()
    if unit not in _UNIT_SECONDS:
        raise ValueError(f"Invalid duration unit: {value!r}")
    return timedelta(seconds=float(amount) * _UNIT_SECONDS[unit])
