"""
TimestampRecord – *pure Pydantic* (no SQLAlchemy imports).

* One row, three date-time kinds built from one common reference.
* Frozen; ``id`` is filled in exactly once by the store.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict
from zoneinfo import ZoneInfo

from pydantic import AwareDatetime, BaseModel, NaiveDatetime, field_validator

from . import temporal
from .temporal import OffsetLike, ZoneLike


class TimestampRecord(BaseModel):
    """Zoned, zone-naive and fixed-offset readings of the same moment."""

    id: int | None = None
    timestamp_with_zone: AwareDatetime
    timestamp_without_zone: NaiveDatetime
    timestamp_with_utc_offset: AwareDatetime

    model_config = {"frozen": True}

    # validation
    @field_validator("timestamp_with_zone", mode="before")
    @classmethod
    def _parse_zoned(cls, v: Any) -> Any:
        return temporal.parse_zoned(v) if isinstance(v, str) else v

    @field_validator("timestamp_with_zone")
    @classmethod
    def _named_zone(cls, v: dt.datetime) -> dt.datetime:
        if not isinstance(v.tzinfo, ZoneInfo):
            raise ValueError(f"expected a named zone (ZoneInfo), got {v.tzinfo!r}")
        return v

    @field_validator("timestamp_without_zone", mode="before")
    @classmethod
    def _parse_local(cls, v: Any) -> Any:
        return temporal.parse_local(v) if isinstance(v, str) else v

    @field_validator("timestamp_with_utc_offset", mode="before")
    @classmethod
    def _parse_offset(cls, v: Any) -> Any:
        return temporal.parse_offset(v) if isinstance(v, str) else v

    @field_validator("timestamp_with_utc_offset")
    @classmethod
    def _fixed_offset(cls, v: dt.datetime) -> dt.datetime:
        if isinstance(v.tzinfo, ZoneInfo):
            raise ValueError(
                f"expected a fixed UTC offset, got named zone {v.tzinfo.key!r}"
            )
        # pydantic's own TzInfo / pytz-style objects ➜ datetime.timezone
        return v.replace(tzinfo=temporal.fixed_offset(v.utcoffset()))

    # factories
    @classmethod
    def from_zoned(cls, zoned: dt.datetime | str) -> "TimestampRecord":
        """All three fields from one zoned reference (local digits kept as-is)."""
        if isinstance(zoned, str):
            zoned = temporal.parse_zoned(zoned)
        return cls(
            timestamp_with_zone=zoned,
            timestamp_without_zone=temporal.to_local(zoned),
            timestamp_with_utc_offset=temporal.to_offset_datetime(zoned),
        )

    @classmethod
    def from_local(cls, local: dt.datetime | str, zone: ZoneLike) -> "TimestampRecord":
        if isinstance(local, str):
            local = temporal.parse_local(local)
        return cls.from_zoned(temporal.at_zone(local, zone))

    # rendering
    def render(
        self, zone: ZoneLike, offset: OffsetLike | None = None
    ) -> "TimestampRecord":
        """
        Copy with the zoned field shown in ``zone`` and the offset field in
        ``offset`` (default: whatever offset ``zone`` uses at that instant).
        The zone-naive field is never touched.
        """
        zoned = temporal.with_zone_same_instant(self.timestamp_with_zone, zone)
        shown = temporal.with_zone_same_instant(self.timestamp_with_utc_offset, zone)
        if offset is None:
            offset = shown.utcoffset()
        return self.model_copy(
            update={
                "timestamp_with_zone": zoned,
                "timestamp_with_utc_offset": temporal.with_offset_same_instant(
                    shown, offset
                ),
            }
        )

    def same_instants(self, other: "TimestampRecord") -> bool:
        """Instants of the aware fields match and naive digits are identical."""
        return (
            temporal.same_instant(self.timestamp_with_zone, other.timestamp_with_zone)
            and temporal.same_instant(
                self.timestamp_with_utc_offset, other.timestamp_with_utc_offset
            )
            and self.timestamp_without_zone == other.timestamp_without_zone
        )

    def display(self) -> Dict[str, Any]:
        """String form of every field (what an HTTP caller sees)."""
        return {
            "id": self.id,
            "timestamp_with_zone": temporal.format_zoned(self.timestamp_with_zone),
            "timestamp_without_zone": temporal.format_local(
                self.timestamp_without_zone
            ),
            "timestamp_with_utc_offset": temporal.format_offset(
                self.timestamp_with_utc_offset
            ),
        }

    # store hook
    def _assign_id(self, rec_id: int) -> None:
        object.__setattr__(self, "id", rec_id)
