"""PostgreSQL dialect implementation."""

from typing import TYPE_CHECKING

from sqlalchemy.engine import URL
from sqlalchemy.pool import QueuePool

from news_curator.storage.dialects.base import BaseDialect

if TYPE_CHECKING:
    from news_curator.config import DatabaseConfig

DEFAULT_PORT = 5432
APPLICATION_NAME = "news-curator"


class PostgreSQLDialect(BaseDialect):
    """PostgreSQL, for deployments with several API workers."""

    @property
    def name(self) -> str:
        return "postgresql"

    def build_url(self, config: "DatabaseConfig") -> str:
        """Build the URL; credentials are escaped by SQLAlchemy.

        Examples:
            >>> postgresql://curator:secret@db/news
        """
        url = URL.create(
            "postgresql",
            username=config.user,
            password=config.password,
            host=config.host or "localhost",
            port=config.port if config.port and config.port != DEFAULT_PORT else None,
            database=config.database,
        )
        return url.render_as_string(hide_password=False)

    def get_engine_kwargs(self, config: "DatabaseConfig") -> dict:
        return {
            "echo": config.echo,
            "poolclass": QueuePool,
            "pool_size": config.pool_size,
            "max_overflow": config.max_overflow,
            # Connections idle between trending/recommendation bursts
            "pool_pre_ping": True,
            "connect_args": {"application_name": APPLICATION_NAME},
        }

    def validate_config(self, config: "DatabaseConfig") -> list[str]:
        errors = []
        if not config.database:
            errors.append("PostgreSQL requires 'database' name")
        if not config.host and not config.user:
            errors.append("PostgreSQL requires either 'host' or 'user'")
        return errors
