"""
The three date-time kinds, expressed with stdlib ``datetime`` + ``zoneinfo``.

* **zoned**  – aware ``datetime`` whose ``tzinfo`` is a :class:`ZoneInfo`
* **offset** – aware ``datetime`` whose ``tzinfo`` is a fixed :class:`timezone`
* **local**  – naive ``datetime``; calendar fields only, no instant

Text form of a zoned value is the ISO-8601 extended one,
``2019-06-27T11:39:34.326+02:00[Europe/Paris]``.
"""

from __future__ import annotations

import re
import datetime as dt
from datetime import timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import DateTimeParseError, UnknownZoneError

UTC = timezone.utc

ZoneLike = ZoneInfo | str
OffsetLike = timezone | timedelta | str | int

_ZONED = re.compile(r"^(?P<stamp>[^\[\]]+)\[(?P<zone>[^\[\]]+)\]$")


# zones & offsets
def zone(name: ZoneLike) -> ZoneInfo:
    """Resolve an IANA identifier (``"Europe/Paris"``) to a :class:`ZoneInfo`."""
    if isinstance(name, ZoneInfo):
        return name
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        raise UnknownZoneError(str(name)) from None


def fixed_offset(value: OffsetLike) -> timezone:
    """``"+01:00"``, ``"Z"``, ``timedelta(hours=1)`` or ``1`` (hours) ➜ timezone."""
    if isinstance(value, timezone):
        return value
    if isinstance(value, timedelta):
        return timezone(value)
    if isinstance(value, int):
        return timezone(timedelta(hours=value))
    text = str(value).strip()
    if text in ("Z", "z"):
        return UTC
    try:
        parsed = dt.datetime.strptime(text, "%z").tzinfo
    except ValueError:
        raise DateTimeParseError(text, "UTC offset") from None
    return parsed  # type: ignore[return-value]


# parsing
def parse_local(text: str) -> dt.datetime:
    """``2019-12-27T11:00:00.000`` ➜ naive datetime."""
    try:
        value = dt.datetime.fromisoformat(text)
    except (ValueError, TypeError):
        raise DateTimeParseError(str(text), "local date-time") from None
    if value.tzinfo is not None:
        raise DateTimeParseError(text, "local date-time", "carries an offset")
    return value


def parse_offset(text: str) -> dt.datetime:
    """``2019-12-27T11:00:00.000+01:00`` (or ``...Z``) ➜ fixed-offset datetime."""
    try:
        value = dt.datetime.fromisoformat(text)
    except (ValueError, TypeError):
        raise DateTimeParseError(str(text), "offset date-time") from None
    if value.tzinfo is None:
        raise DateTimeParseError(text, "offset date-time", "missing UTC offset")
    return value


def parse_zoned(text: str) -> dt.datetime:
    """
    ``2019-06-27T11:39:34.326+01:00[Europe/Paris]`` ➜ zoned datetime.

    Local fields and zone win.  The written offset is only honoured when the
    zone actually uses it at that local time (picks a side of an overlap);
    otherwise the zone rules decide, so the example above comes back as
    ``11:39:34.326+02:00`` (Paris is on summer time in June).
    """
    m = _ZONED.match(text.strip()) if isinstance(text, str) else None
    if m is None:
        raise DateTimeParseError(str(text), "zoned date-time", "expected '<iso>[Area/City]'")
    try:
        stamp = dt.datetime.fromisoformat(m["stamp"])
    except ValueError:
        raise DateTimeParseError(text, "zoned date-time") from None
    try:
        tz = zone(m["zone"])
    except UnknownZoneError as exc:
        raise DateTimeParseError(text, "zoned date-time", str(exc)) from None

    preferred = stamp.utcoffset() if stamp.tzinfo is not None else None
    return at_zone(stamp.replace(tzinfo=None), tz, preferred)


# conversion
def at_zone(
    local: dt.datetime, z: ZoneLike, preferred: timedelta | None = None
) -> dt.datetime:
    """
    Attach a named zone to a naive wall-clock value.

    Overlap ➜ ``preferred`` offset if valid, else the earlier one.
    Gap     ➜ shifted forward by the length of the gap.
    """
    if local.tzinfo is not None:
        raise ValueError("at_zone() expects a naive datetime")
    tz = zone(z)
    candidates = [local.replace(tzinfo=tz, fold=f) for f in (0, 1)]
    if preferred is not None:
        for c in candidates:
            if c.utcoffset() == preferred:
                return c
    # UTC round-trip normalises gap times
    return candidates[0].astimezone(UTC).astimezone(tz)


def to_offset_datetime(value: dt.datetime) -> dt.datetime:
    """Same wall clock, zone swapped for the fixed offset in force."""
    _require_aware(value)
    return value.replace(tzinfo=timezone(value.utcoffset()), fold=0)


def to_local(value: dt.datetime) -> dt.datetime:
    """Drop zone/offset, keep the digits."""
    return value.replace(tzinfo=None, fold=0)


def with_zone_same_instant(value: dt.datetime, z: ZoneLike) -> dt.datetime:
    _require_aware(value)
    return value.astimezone(zone(z))


def with_offset_same_instant(value: dt.datetime, offset: OffsetLike) -> dt.datetime:
    _require_aware(value)
    return value.astimezone(fixed_offset(offset))


def same_instant(a: dt.datetime, b: dt.datetime) -> bool:
    """Instant equality regardless of zone/offset (``fold`` included)."""
    _require_aware(a)
    _require_aware(b)
    return a.astimezone(UTC) == b.astimezone(UTC)


def _require_aware(value: dt.datetime) -> None:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{value!r} is naive and does not denote an instant")


# formatting
def _iso(value: dt.datetime) -> str:
    spec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    return value.isoformat(timespec=spec)


def format_local(value: dt.datetime) -> str:
    return _iso(value)


def format_offset(value: dt.datetime) -> str:
    return _iso(value)


def format_zoned(value: dt.datetime) -> str:
    key = getattr(value.tzinfo, "key", None)
    if key is None:
        raise ValueError(f"{value!r} is not attached to a named zone")
    return f"{_iso(value)}[{key}]"
