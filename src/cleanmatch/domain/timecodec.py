"""Conversions between "HH:MM" strings and microsecond offsets.

All scheduling arithmetic works on integer microseconds since midnight so
interval math never accumulates floating-point drift.
"""

import re

# Number of microseconds in one hour.
HOUR_MICROS = 3_600_000_000
# Number of microseconds in one minute.
MINUTE_MICROS = 60_000_000

_FIELD_RE = re.compile(r"\s*([+-]?\d+)")


def hours(n: int) -> int:
    """Offset of ``n`` whole hours."""
    return n * HOUR_MICROS


def hours_minutes(h: int, m: int) -> int:
    """Offset of ``h`` hours and ``m`` minutes."""
    return h * HOUR_MICROS + m * MINUTE_MICROS


def minutes(n: int) -> int:
    """Offset of ``n`` whole minutes."""
    return n * MINUTE_MICROS


def micros_to_hhmm(us: int) -> str:
    """Format a microsecond offset as zero-padded "HH:MM".

    Offsets past midnight are not wrapped, so 25 hours formats as "25:00".
    """
    h = us // HOUR_MICROS
    m = (us % HOUR_MICROS) // MINUTE_MICROS
    return f"{h:02d}:{m:02d}"


def hhmm_to_micros(s: str) -> int:
    """Parse "HH:MM" into a microsecond offset.

    No range checks are made. Parsing stops at the first field that is not
    an integer and any unparsed field counts as zero, so "abc" is 0 and
    "08:xx" is 8 hours. Callers validate the format upstream.
    """
    h = m = 0
    match = _FIELD_RE.match(s)
    if match:
        h = int(match.group(1))
        rest = s[match.end():]
        if rest.startswith(":"):
            minute_match = _FIELD_RE.match(rest, 1)
            if minute_match:
                m = int(minute_match.group(1))
    return h * HOUR_MICROS + m * MINUTE_MICROS
