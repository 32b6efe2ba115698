"""Time window parsing for rate-based rules."""

import re
from datetime import timedelta

_WINDOW_PATTERN = re.compile(r"^\s*(\d+)\s*([mhd])\s*$")

_UNITS = {
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_time_window(value: str | None) -> timedelta:
    """Parse windows such as ``"5m"``, ``"1h"`` or ``"7d"``.

    Raises ValueError for a missing, malformed or zero-length window.
    """
    if not value:
        raise ValueError("time window is required")
    match = _WINDOW_PATTERN.match(value.lower())
    if not match:
        raise ValueError(f"unparseable time window {value!r}")
    count = int(match.group(1))
    if count == 0:
        raise ValueError(f"time window {value!r} has zero length")
    return timedelta(**{_UNITS[match.group(2)]: count})
