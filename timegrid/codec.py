"""Wall-clock <-> offset timestamp conversion.

Items are stored as ``YYYY-MM-DDTHH:MM:SS+HH:MM`` strings carrying the offset
that was in effect for the person who entered them. ``tz=None`` everywhere
below means "the system local timezone", i.e. the caller's current offset.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from timegrid.errors import InvalidInput

DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")
MAX_OFFSET_MINUTES = 24 * 60


def parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value or "").strip()
    match = DATE_PATTERN.match(raw)
    if not match:
        raise InvalidInput(f"Invalid date {value!r}, expected YYYY-MM-DD", value)
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError as exc:
        raise InvalidInput(f"Invalid date {value!r}: {exc}", value) from exc


def parse_time(value) -> time:
    if isinstance(value, time):
        return value.replace(microsecond=0, tzinfo=None)
    raw = str(value or "").strip()
    match = TIME_PATTERN.match(raw)
    if not match:
        raise InvalidInput(f"Invalid time {value!r}, expected HH:MM", value)
    try:
        return time(int(match.group(1)), int(match.group(2)), int(match.group(3) or 0))
    except ValueError as exc:
        raise InvalidInput(f"Invalid time {value!r}: {exc}", value) from exc


def fixed_offset(minutes) -> timezone:
    """Fixed tzinfo from an east-positive UTC offset in minutes."""
    try:
        value = int(minutes)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid UTC offset {minutes!r}", minutes) from exc
    if not -MAX_OFFSET_MINUTES < value < MAX_OFFSET_MINUTES:
        raise InvalidInput(f"UTC offset out of range: {minutes!r}", minutes)
    return timezone(timedelta(minutes=value))


def localize(naive: datetime, tz: tzinfo | None = None) -> datetime:
    if naive.tzinfo is not None:
        return naive.astimezone(tz) if tz is not None else naive.astimezone()
    if tz is not None:
        return naive.replace(tzinfo=tz)
    try:
        return naive.astimezone()
    except (OverflowError, OSError) as exc:
        raise InvalidInput(f"Cannot resolve local offset for {naive.isoformat()}") from exc


def to_local(instant: datetime, tz: tzinfo | None = None) -> datetime:
    return instant.astimezone(tz) if tz is not None else instant.astimezone()


def format_instant(instant: datetime) -> str:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidInput("Timestamp has no UTC offset", instant)
    return instant.replace(microsecond=0).isoformat(timespec="seconds")


def encode_local(date_str, time_str, tz: tzinfo | None = None) -> str:
    """Interpret (date, time) as wall-clock time in ``tz`` and serialize it with that offset."""
    day = parse_date(date_str)
    clock = parse_time(time_str)
    return format_instant(localize(datetime.combine(day, clock), tz))


def decode_local(timestamp, tz: tzinfo | None = None) -> tuple[str, str]:
    """Inverse of encode_local, used to pre-populate edit forms."""
    local = to_local(parse_instant(timestamp), tz)
    return local.date().isoformat(), f"{local.hour:02d}:{local.minute:02d}"


def parse_instant(value) -> datetime:
    if isinstance(value, datetime):
        instant = value
    else:
        raw = str(value or "").strip()
        if not raw:
            raise InvalidInput("Empty timestamp", value)
        try:
            instant = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise InvalidInput(f"Invalid timestamp {value!r}", value) from exc
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidInput(f"Timestamp {value!r} has no UTC offset", value)
    return instant


def to_utc_iso(instant) -> str:
    return parse_instant(instant).astimezone(timezone.utc).isoformat(timespec="seconds")


def local_today(tz: tzinfo | None = None) -> date:
    if tz is None:
        return date.today()
    return datetime.now(tz).date()
