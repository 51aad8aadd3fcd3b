"""
Column types for the two column families.

``UTCDateTime``   – ``timestamptz`` on PostgreSQL; elsewhere a plain
                    DATETIME holding UTC.  Always hands back UTC-aware values.
``LocalDateTime`` – ``timestamp`` (without time zone); digits in, digits out.
"""

import datetime as dt

from sqlalchemy import DateTime, TypeDecorator

UTC = dt.timezone.utc

# dialects whose DateTime(timezone=True) keeps the offset on the wire
NATIVE_TZ_DIALECTS = frozenset({"postgresql", "oracle", "mssql"})


class UTCDateTime(TypeDecorator):
    """Instant column: zone/offset is dropped on write, UTC comes back on read."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(f"naive datetime {value!r} bound to an instant column")
        value = value.astimezone(UTC)
        if dialect.name not in NATIVE_TZ_DIALECTS:
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        # PostgreSQL renders timestamptz in the *session* zone; anything
        # without tz support hands back the naive UTC we wrote.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class LocalDateTime(TypeDecorator):
    """Wall-clock column: aware values are refused rather than converted."""

    impl = DateTime(timezone=False)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            raise ValueError(f"aware datetime {value!r} bound to a zone-naive column")
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            return value.replace(tzinfo=None)
        return value
