"""SQLite dialect implementation."""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy.pool import QueuePool, StaticPool

from news_curator.storage.dialects.base import BaseDialect

if TYPE_CHECKING:
    from news_curator.config import DatabaseConfig

MEMORY_PATHS = {":memory:", ""}
# Partial indexes (CREATE INDEX ... WHERE) arrived in SQLite 3.8.0
MIN_SQLITE_VERSION = (3, 8, 0)
BUSY_TIMEOUT_SECONDS = 30


def _is_memory(path: str) -> bool:
    return path in MEMORY_PATHS or path == "sqlite://"


class SQLiteDialect(BaseDialect):
    """SQLite, the default backend.

    File databases run in WAL mode so API reads are not blocked by writes.
    In-memory databases share one connection, otherwise every pooled
    connection would see its own empty database.
    """

    @property
    def name(self) -> str:
        return "sqlite"

    def build_url(self, config: "DatabaseConfig") -> str:
        """Build the URL from a file path, ``:memory:`` or a full sqlite URL."""
        path = config.path
        if _is_memory(path):
            return "sqlite://"
        if path.startswith("sqlite://"):
            return path

        Path(path).parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{path}"

    def get_engine_kwargs(self, config: "DatabaseConfig") -> dict:
        """Engine kwargs; request threads share connections across the pool."""
        kwargs: dict = {
            "echo": config.echo,
            "connect_args": {
                "check_same_thread": False,
                "timeout": BUSY_TIMEOUT_SECONDS,
            },
        }
        if _is_memory(config.path):
            kwargs["poolclass"] = StaticPool
        else:
            kwargs["poolclass"] = QueuePool
            kwargs["pool_size"] = config.pool_size
            kwargs["max_overflow"] = config.max_overflow
        return kwargs

    def on_connect(self, dbapi_conn: Any) -> None:
        """Enforce foreign keys (interaction cascades) and enable WAL."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    def validate_config(self, config: "DatabaseConfig") -> list[str]:
        errors = []
        if sqlite3.sqlite_version_info < MIN_SQLITE_VERSION:
            errors.append(
                f"SQLite {sqlite3.sqlite_version} lacks partial index support "
                f"(need {'.'.join(map(str, MIN_SQLITE_VERSION))}+)"
            )
        if not _is_memory(config.path) and not config.path.startswith("sqlite://"):
            db_path = Path(config.path)
            if db_path.exists() and not db_path.is_file():
                errors.append(f"Database path exists but is not a file: {config.path}")
        return errors
