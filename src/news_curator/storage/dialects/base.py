"""Abstract base dialect for database backends."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from sqlalchemy import Engine, event

if TYPE_CHECKING:
    from news_curator.config import DatabaseConfig


class BaseDialect(ABC):
    """Turns a ``DatabaseConfig`` into a ready-to-use engine for one backend.

    The interactions table relies on a partial unique index (one view, like
    or share per user and article), so every dialect must support partial
    indexes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical dialect name."""

    @abstractmethod
    def build_url(self, config: "DatabaseConfig") -> str:
        """SQLAlchemy URL for the configured database."""

    @abstractmethod
    def get_engine_kwargs(self, config: "DatabaseConfig") -> dict:
        """Keyword arguments for ``create_engine()``."""

    def on_connect(self, dbapi_conn: Any) -> None:
        """Per-connection setup hook; nothing by default."""

    def setup_engine_events(self, engine: Engine) -> None:
        """Attach ``on_connect`` to the engine's connect event."""

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_conn, connection_record):
            self.on_connect(dbapi_conn)

    def validate_config(self, config: "DatabaseConfig") -> list[str]:
        """Problems with the configuration, empty when usable."""
        return []

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"
