"""
Single-table schema: one row per TimestampRecord.

On PostgreSQL the two instant columns are ``timestamptz`` (stored as UTC,
rendered in the session zone) and the local column is ``timestamp``.
"""

from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

from .types import LocalDateTime, UTCDateTime

Base = declarative_base()


class TimestampRow(Base):
    __tablename__ = "timestamp_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp_with_zone = Column(UTCDateTime, nullable=False)
    timestamp_without_zone = Column(LocalDateTime, nullable=False)
    timestamp_with_utc_offset = Column(UTCDateTime, nullable=False)
