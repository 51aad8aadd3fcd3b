"""
Public surface for tzroundtrip.
Importing this module does **not** touch the database; call
`tzroundtrip.init_tzroundtrip(engine)` during start-up.
"""

from .bootstrap import create_db_engine, init_tzroundtrip, set_session_timezone
from .core.record import TimestampRecord
from .persistence.store import TimestampStore

__all__ = [
    "TimestampRecord",
    "TimestampStore",
    "create_db_engine",
    "init_tzroundtrip",
    "set_session_timezone",
]
