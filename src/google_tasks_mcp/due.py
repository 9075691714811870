"""Due date conversion between user input and RFC 3339 timestamps.

Users write due dates as ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM`` in the
server's display zone; the Tasks API stores absolute RFC 3339 timestamps.
Rendering goes the other way and drops the time of day when it is local
midnight, so a timestamp that is exactly midnight in the display zone
reads the same as a date without a time.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo

from google_tasks_mcp.exceptions import InvalidDueFormatError

_DUE_INPUT = re.compile(r"(\d{4})-(\d{2})-(\d{2})(?:T(\d{2}):(\d{2}))?", re.ASCII)

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.\d+)?"
    r"(?:(Z)|([+-])(\d{2}):(\d{2}))",
    re.ASCII,
)


def _format_date(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def format_rfc3339(moment: datetime) -> str:
    """Render an aware datetime as RFC 3339 with second precision.

    A zero UTC offset is written as ``Z``; any other offset as ``+HH:MM``.
    """
    stamp = f"{_format_date(moment)}T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"

    offset = moment.utcoffset()
    if not offset:
        return stamp + "Z"

    total_minutes = int(offset.total_seconds()) // 60
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{stamp}{sign}{hours:02d}:{minutes:02d}"


def encode_due(value: str, zone: tzinfo | None = None) -> str:
    """Convert a user-supplied due date to an RFC 3339 timestamp.

    Args:
        value: ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM``.
        zone: Zone the input is expressed in (defaults to UTC).

    Returns:
        Zone-qualified RFC 3339 timestamp.

    Raises:
        InvalidDueFormatError: If the value matches neither form or names
            an impossible date or time.
    """
    match = _DUE_INPUT.fullmatch(value)
    if match is None:
        raise InvalidDueFormatError(value)

    year, month, day, hour, minute = match.groups()
    try:
        moment = datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            tzinfo=zone or timezone.utc,
        )
    except ValueError as e:
        raise InvalidDueFormatError(value) from e

    return format_rfc3339(moment)


def decode_due(value: str, zone: tzinfo | None = None) -> str:
    """Render a backend timestamp for display in ``zone``.

    Never raises: a value that is not RFC 3339 is returned unchanged so
    it can still be shown to the user.

    Args:
        value: RFC 3339 timestamp, fractional seconds allowed.
        zone: Display zone (defaults to UTC).

    Returns:
        ``YYYY-MM-DD`` at local midnight, otherwise ``YYYY-MM-DD HH:MM``.
    """
    match = _RFC3339.fullmatch(value)
    if match is None:
        return value

    year, month, day, hour, minute, second, utc, sign, off_hours, off_minutes = match.groups()
    try:
        if utc:
            offset = timezone.utc
        else:
            delta = timedelta(hours=int(off_hours), minutes=int(off_minutes))
            offset = timezone(-delta if sign == "-" else delta)
        moment = datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            tzinfo=offset,
        )
        local = moment.astimezone(zone or timezone.utc)
    except (ValueError, OverflowError):
        # Out of range once shifted into the display zone
        return value

    if local.hour == 0 and local.minute == 0:
        return _format_date(local)
    return f"{_format_date(local)} {local.hour:02d}:{local.minute:02d}"
