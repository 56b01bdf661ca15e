# Chirpy Core Module
from .config import get_settings, settings
from .database import (
    Database,
    DatabaseError,
    DatabaseIOError,
    DatabaseSerializationError,
    check_db_connection,
    get_database,
    get_db,
)
from .locks import ReadWriteLock
from .logging import setup_logging

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "Database",
    "DatabaseError",
    "DatabaseIOError",
    "DatabaseSerializationError",
    "ReadWriteLock",
    "get_database",
    "get_db",
    "check_db_connection",
]
