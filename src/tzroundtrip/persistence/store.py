"""
Thin data-access layer around the `timestamp_records` table.

Every call opens its own Session and releases it on the way out; errors
from the database are not caught here.
"""

from __future__ import annotations

from typing import List

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .. import clock
from ..core.record import TimestampRecord
from ..core import temporal
from ..core.temporal import OffsetLike, ZoneLike
from ..errors import RecordAlreadyStoredError
from .models import TimestampRow

logger = structlog.get_logger(__name__)

_UTC_ZONE = temporal.zone("UTC")


class TimestampStore:
    """store / fetch_all / fetch_by_id / delete for :class:`TimestampRecord`."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _new_session(self) -> Session:
        return Session(bind=self.engine, future=True)

    # ---- writes ---------------------------------------------------------
    def store(self, rec: TimestampRecord) -> int:
        """
        Insert ``rec`` and hand back its new id (also set on ``rec``).

        Zoned/offset values go in as instants; the local value goes in as
        written.
        """
        if rec.id is not None:
            raise RecordAlreadyStoredError(f"record already stored with id={rec.id}")

        row = TimestampRow(
            timestamp_with_zone=rec.timestamp_with_zone,
            timestamp_without_zone=rec.timestamp_without_zone,
            timestamp_with_utc_offset=rec.timestamp_with_utc_offset,
        )
        with self._new_session() as s:
            s.add(row)
            s.flush()
            rec_id = row.id
            s.commit()

        rec._assign_id(rec_id)
        logger.info("record_stored", id=rec_id)
        return rec_id

    def delete(self, rec_id: int) -> bool:
        """Remove one row; ``False`` when nothing matched."""
        with self._new_session() as s:
            result = s.execute(delete(TimestampRow).where(TimestampRow.id == rec_id))
            s.commit()
        removed = result.rowcount > 0
        logger.info("record_deleted", id=rec_id, removed=removed)
        return removed

    # ---- reads ----------------------------------------------------------
    def fetch_all(
        self, zone: ZoneLike | None = None, offset: OffsetLike | None = None
    ) -> List[TimestampRecord]:
        """Every row, oldest id first, rendered in ``zone`` / ``offset``."""
        tz, off = self._display(zone, offset)
        with self._new_session() as s:
            rows = s.execute(select(TimestampRow).order_by(TimestampRow.id)).scalars()
            return [self._to_record(r, tz, off) for r in rows]

    def fetch_by_id(
        self,
        rec_id: int,
        zone: ZoneLike | None = None,
        offset: OffsetLike | None = None,
    ) -> TimestampRecord | None:
        """Row ``rec_id`` rendered in ``zone`` / ``offset``, or ``None``."""
        tz, off = self._display(zone, offset)
        with self._new_session() as s:
            row = s.get(TimestampRow, rec_id)
            return self._to_record(row, tz, off) if row is not None else None

    def count(self) -> int:
        with self._new_session() as s:
            return s.execute(select(func.count()).select_from(TimestampRow)).scalar_one()

    # ---- helpers --------------------------------------------------------
    @staticmethod
    def _display(z, offset):
        tz = temporal.zone(z) if z is not None else clock.get_default_zone()
        return tz, temporal.fixed_offset(offset) if offset is not None else None

    @staticmethod
    def _to_record(row: TimestampRow, tz, off) -> TimestampRecord:
        # columns come back as UTC; display zone/offset is decided now
        stored = TimestampRecord(
            id=row.id,
            timestamp_with_zone=row.timestamp_with_zone.astimezone(_UTC_ZONE),
            timestamp_without_zone=row.timestamp_without_zone,
            timestamp_with_utc_offset=row.timestamp_with_utc_offset,
        )
        return stored.render(tz, off)
