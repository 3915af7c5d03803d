"""Timestamp reformatting helpers for the CAMT.053.001.08 writer.

Both helpers are total: they never raise. Text that cannot be interpreted is
returned unchanged so the writer can still emit it.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from .logging_setup import get_logger

_logger = get_logger("camt_convert.datetimes")

# Offset rendered for timestamps that carry no zone designator.
FALLBACK_OFFSET = "+02:00"

_TIMESTAMP_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.\d+)?"
    r"(?:(?P<utc>[Zz])|(?P<sign>[+-])(?P<hh>\d{2}):?(?P<mm>\d{2}))?$"
)


def _parse_offset(match: re.Match[str]) -> timezone | None:
    if match.group("utc"):
        return timezone.utc
    if match.group("sign") is None:
        return None
    delta = timedelta(hours=int(match.group("hh")), minutes=int(match.group("mm")))
    if match.group("sign") == "-":
        delta = -delta
    return timezone(delta)


def to_offset_datetime(value: str) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SS±HH:MM``.

    - ``2025-06-22T17:33:43.291656435Z`` -> ``2025-06-22T17:33:43+00:00``
    - ``2025-06-20T00:00:00+02:00`` -> ``2025-06-20T00:00:00+02:00``

    Fractional seconds are dropped. A timestamp without an offset is read as
    UTC wall-clock time and rendered with :data:`FALLBACK_OFFSET`. Anything
    else (including out-of-range dates or offsets) is returned unchanged.
    """

    match = _TIMESTAMP_RE.match(value)
    if match is None:
        _logger.debug("to_offset_datetime:unparsed value=%r", value)
        return value

    try:
        naive = datetime.strptime(f"{match.group(1)}T{match.group(2)}", "%Y-%m-%dT%H:%M:%S")
        tz = _parse_offset(match)
    except ValueError:
        _logger.debug("to_offset_datetime:unparsed value=%r", value)
        return value

    if tz is None:
        return naive.strftime("%Y-%m-%dT%H:%M:%S") + FALLBACK_OFFSET
    return naive.replace(tzinfo=tz).isoformat(timespec="seconds")


def to_date_only(value: str) -> str:
    """Return the leading ``YYYY-MM-DD`` of ``value``.

    This is a positional cut, not a date parse: any string of ten or more
    characters yields its first ten; shorter strings come back unchanged.
    """

    return value[:10] if len(value) >= 10 else value


__all__ = ["FALLBACK_OFFSET", "to_date_only", "to_offset_datetime"]
