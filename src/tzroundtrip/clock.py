"""
Ambient ("process default") time zone.

Every render operation takes an explicit zone; this module only holds the
single value used when the caller leaves it out, the way a JVM's
``TimeZone.setDefault`` or a shell's ``TZ`` would.  Not thread-safe.
"""

from __future__ import annotations

import datetime as dt
from contextlib import contextmanager
from typing import Iterator
from zoneinfo import ZoneInfo

import structlog

from .config import get_settings
from .core.temporal import ZoneLike, zone

logger = structlog.get_logger(__name__)

_default: ZoneInfo | None = None


def get_default_zone() -> ZoneInfo:
    global _default
    if _default is None:
        _default = zone(get_settings().default_timezone)
    return _default


def set_default_zone(name: ZoneLike) -> ZoneInfo:
    """Replace the ambient zone; returns the previous one."""
    global _default
    previous = get_default_zone()
    _default = zone(name)
    logger.debug("default_zone_changed", previous=previous.key, current=_default.key)
    return previous


def reset_default_zone() -> None:
    """Forget the override; next read falls back to configuration."""
    global _default
    _default = None


@contextmanager
def default_zone(name: ZoneLike) -> Iterator[ZoneInfo]:
    previous = set_default_zone(name)
    try:
        yield get_default_zone()
    finally:
        set_default_zone(previous)


def now(z: ZoneLike | None = None) -> dt.datetime:
    """Current instant rendered in ``z`` (ambient zone by default)."""
    return dt.datetime.now(tz=zone(z) if z is not None else get_default_zone())
