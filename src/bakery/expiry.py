"""Cookie expiration dates.

Two entry points:

- ``format_http_date`` turns an absolute ``datetime`` into the canonical
  cookie date (``Sun, 25-Apr-1999 00:40:33 GMT``).
- ``compute_expiry`` is the default string delegate. It resolves relative
  offsets (``+30s``, ``-1d``, ``now``, ...) and hands back any other
  string untouched.

Day and month names come from fixed tables rather than ``strftime`` so
the output does not depend on the process locale.
"""

import re
import time
from datetime import UTC, datetime

from bakery.errors import ArgumentError

DATE_FORMAT = "%a, %d-%b-%Y %H:%M:%S GMT"
"""The cookie date pattern, as a ``strftime`` format (for reference and
for callers formatting dates themselves)."""

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Seconds per unit. Months and years are fixed lengths, not calendar-aware.
_UNIT_SECONDS = {
    "": 1,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "M": 30 * 24 * 60 * 60,
    "y": 365 * 24 * 60 * 60,
}

_OFFSET_RE = re.compile(r"(?P<sign>[+-])(?P<amount>\d+)(?P<unit>[smhdMy]?)")


def format_http_date(moment: datetime) -> str:
    """Format *moment* as a canonical cookie date in GMT.

    Aware datetimes are converted to UTC. Naive datetimes are taken as
    local time, matching ``datetime.astimezone``.
    """
    utc = moment.astimezone(UTC)
    return (
        f"{_WEEKDAYS[utc.weekday()]}, {utc.day:02d}-{_MONTHS[utc.month - 1]}-{utc.year:04d} "
        f"{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d} GMT"
    )


def parse_offset(raw: str) -> int | None:
    """Return the signed offset in seconds described by *raw*.

    Returns ``None`` when *raw* is not a relative expression, so the
    caller can treat it as an absolute date string.

        >>> parse_offset("+10m")
        600
        >>> parse_offset("now")
        0
        >>> parse_offset("Sun, 25-Apr-1999 00:40:33 GMT") is None
        True
    """
    text = raw.strip()
    if text.lower() == "now":
        return 0
    match = _OFFSET_RE.fullmatch(text)
    if match is None:
        return None
    seconds = int(match["amount"]) * _UNIT_SECONDS[match["unit"]]
    return -seconds if match["sign"] == "-" else seconds


def compute_expiry(raw: str, *, now: float | None = None) -> str:
    """Resolve a string expiration to the value stored on a cookie.

    Relative offsets are added to *now* (epoch seconds, defaults to the
    current time) and formatted as a cookie date. Any other string is
    returned verbatim.

    Raises ``ArgumentError`` when the offset lands outside the dates a
    ``datetime`` can represent.
    """
    offset = parse_offset(raw)
    if offset is None:
        return raw
    if now is None:
        now = time.time()
    try:
        moment = datetime.fromtimestamp(now + offset, tz=UTC)
    except (OverflowError, ValueError, OSError) as exc:
        msg = f"Expiration offset {raw!r} is out of range"
        raise ArgumentError(msg) from exc
    return format_http_date(moment)
