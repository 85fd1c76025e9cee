"""Storage layer modules for News Curator."""

from news_curator.storage.database import (
    DatabaseManager,
    close_db,
    get_db,
    get_engine,
    get_session_factory,
    init_db,
)

__all__ = [
    "DatabaseManager",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_db",
    "close_db",
]
