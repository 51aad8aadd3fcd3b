"""
Single entry-point that wires SQLAlchemy into tzroundtrip.
Call once, e.g. in FastAPI startup or a test fixture.
"""

from __future__ import annotations

import weakref

import structlog
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from .config import get_settings
from .core.temporal import zone
from .persistence.models import Base
from .persistence.store import TimestampStore

logger = structlog.get_logger(__name__)

_session_zones: "weakref.WeakKeyDictionary[Engine, str]" = weakref.WeakKeyDictionary()
_hooked: "weakref.WeakSet[Engine]" = weakref.WeakSet()


def create_db_engine(
    database_url: str | None = None, session_timezone: str | None = None
) -> Engine:
    """
    Engine whose every new connection runs in ``session_timezone``.

    PostgreSQL gets ``SET TIME ZONE``; SQLite has no session zone, so
    the setting only matters for how PostgreSQL renders ``timestamptz``.
    """
    settings = get_settings()
    url = database_url or settings.database_url
    session_tz = zone(session_timezone or settings.session_timezone).key

    kwargs = {"pool_pre_ping": True, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    engine = create_engine(url, **kwargs)
    set_session_timezone(engine, session_tz)
    return engine


def set_session_timezone(engine: Engine, name: str) -> None:
    """Apply ``name`` as the database session zone for new connections."""
    name = zone(name).key
    _install_hook(engine)
    _session_zones[engine] = name
    if engine.dialect.name != "postgresql":
        logger.debug("session_timezone_ignored", dialect=engine.dialect.name, zone=name)
        return
    engine.dispose()  # pooled connections still carry the old zone
    logger.debug("session_timezone_set", zone=name)


def _install_hook(engine: Engine) -> None:
    """One connect listener per engine; it reads the zone at connect time."""
    if engine in _hooked or engine.dialect.name != "postgresql":
        return

    @event.listens_for(engine, "connect")
    def _set_tz(dbapi_conn, _record):
        name = _session_zones.get(engine)
        if name is None:
            return
        with dbapi_conn.cursor() as cur:
            cur.execute(f"SET TIME ZONE '{name}'")
        dbapi_conn.commit()

    _hooked.add(engine)


def get_session_timezone(engine: Engine) -> str | None:
    return _session_zones.get(engine)


def init_tzroundtrip(engine: Engine) -> TimestampStore:
    """Create the table if needed and hand back a store bound to ``engine``."""
    Base.metadata.create_all(engine)  # ← this line creates table
    return TimestampStore(engine)
