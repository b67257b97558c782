"""
timecodec.py - "HH:MM" <-> minute-of-day conversion.

Hours are not bounds-checked on parse ("99:00" -> 5940); formatting wraps
modulo one day so slot arithmetic can run past midnight.
"""

import re

from callrates.errors import FormatError

MINUTES_PER_DAY = 24 * 60

_PARSE_RE = re.compile(r"(\d+):(\d+)")
_STRICT_RE = re.compile(r"\d{2}:\d{2}")


def to_minutes(hhmm: str) -> int:
    """Parse "HH:MM" into minutes since midnight. Raises FormatError."""
    if not isinstance(hhmm, str):
        raise FormatError(f"Time must be a string, got {type(hhmm).__name__}")
    m = _PARSE_RE.fullmatch(hhmm.strip())
    if m is None:
        raise FormatError(f"Invalid time {hhmm!r}, expected HH:MM")
    return int(m.group(1)) * 60 + int(m.group(2))


def to_hhmm(minutes: int) -> str:
    tot = minutes % MINUTES_PER_DAY
    return "%02d:%02d" % (tot // 60, tot % 60)


def is_hhmm(value) -> bool:
    """Strict two-digit "HH:MM" check used to filter stored slot lists."""
    return isinstance(value, str) and bool(_STRICT_RE.fullmatch(value))
