"""RFC3339 timestamp parsing and compact time text forms."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
import re

_RFC3339_RE = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[Tt ]"
    r"(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})"
)

# Offsets stay under a day, so instants inside these bounds convert to any zone.
_EARLIEST_UTC = datetime.min.replace(tzinfo=timezone.utc) + timedelta(days=1)
_LATEST_UTC = datetime.max.replace(tzinfo=timezone.utc) - timedelta(days=1)


def parse_rfc3339(text: str) -> datetime | None:
    """Parse an RFC3339 date-time into an offset-aware datetime.

    Returns ``None`` for anything that is not a full RFC3339 date-time,
    including naive timestamps, out-of-range fields and instants too close
    to the ``datetime`` bounds to be shown in every time zone.
    """
    match = _RFC3339_RE.fullmatch(text)
    if match is None:
        return None

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    offset = match.group("offset")
    parse_target = (
        f"{match.group('date')}T{match.group('time')}.{fraction}"
        f"{'+00:00' if offset in {'Z', 'z'} else offset}"
    )

    try:
        parsed = datetime.fromisoformat(parse_target)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return None

    try:
        in_utc = parsed.astimezone(timezone.utc)
    except OverflowError:
        return None
    if not _EARLIEST_UTC <= in_utc <= _LATEST_UTC:
        return None
    return parsed


def format_instant(value: datetime, local_tz: tzinfo | None = None) -> str:
    """Render an instant as ``HH:MM:SS`` in ``local_tz`` (process zone when None)."""
    if local_tz is None:
        local = value.astimezone()
    else:
        local = value.astimezone(local_tz)
    return local.strftime("%H:%M:%S")


def format_duration(span: timedelta) -> str:
    """Render an elapsed span as hours, minutes or seconds."""
    total_seconds = int(span.total_seconds())
    sign = "-" if total_seconds < 0 else ""
    total_seconds = abs(total_seconds)

    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{sign}{hours}:{minutes:02d} hours"
    if minutes > 0:
        return f"{sign}{minutes}:{seconds:02d} minutes"
    return f"{sign}{seconds} seconds"
