"""Database package with engine and session management."""

from clinic_inventory.db.session import async_session_maker, dispose_engine, engine, get_session, get_session_maker

__all__ = [
    "async_session_maker",
    "dispose_engine",
    "engine",
    "get_session",
    "get_session_maker",
]
