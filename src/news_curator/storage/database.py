"""
Database connection and session management.
"""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from news_curator.config import get_config
from news_curator.logger import get_logger
from news_curator.models import Base
from news_curator.storage.dialects import get_dialect

if TYPE_CHECKING:
    from news_curator.config import DatabaseConfig

logger = get_logger(__name__)

# Global engine and session factory
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _create_engine(db_config: "DatabaseConfig") -> Engine:
    """Create an engine for a database configuration via its dialect."""
    dialect = get_dialect(db_config.type)

    problems = dialect.validate_config(db_config)
    if problems:
        raise ValueError(f"Invalid {dialect.name} configuration: {'; '.join(problems)}")

    engine = create_engine(dialect.build_url(db_config), **dialect.get_engine_kwargs(db_config))
    dialect.setup_engine_events(engine)
    return engine


def get_engine() -> Engine:
    """Get or create the global database engine."""
    global _engine

    if _engine is None:
        _engine = _create_engine(get_config().database)

    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the global session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

    return _session_factory


@contextmanager
def _transaction(factory: sessionmaker) -> Generator[Session, None, None]:
    """One session per unit of work: commit on success, roll back on error."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db():
    """Transactional session on the global engine.

    Example:
        >>> with get_db() as session:
        ...     UserRepository(session).get_by_username("reader")
    """
    return _transaction(get_session_factory())


def init_db(drop_all: bool = False) -> None:
    """Create all tables on the global engine.

    Args:
        drop_all: If True, drop all tables first (data is lost)
    """
    engine = get_engine()

    if drop_all:
        logger.warning("Dropping all tables - data will be lost!")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


def close_db() -> None:
    """Dispose of the global engine."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _session_factory = None


class DatabaseManager:
    """Engine and sessions for one database, independent of the global engine.

    The web app and tests each hold their own manager. Without a path or a
    config the manager borrows the global engine and leaves it open on close.
    """

    def __init__(self, db_path: Optional[str] = None, db_config: Optional["DatabaseConfig"] = None):
        if db_path:
            from news_curator.config import DatabaseConfig

            db_config = DatabaseConfig(type="sqlite", path=db_path)
        self._db_config = db_config
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def owns_engine(self) -> bool:
        return self._db_config is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = _create_engine(self._db_config) if self.owns_engine else get_engine()
        return self._engine

    def init_db(self, drop_all: bool = False) -> None:
        """Create tables, dropping existing ones first when ``drop_all`` is set."""
        if drop_all:
            Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)

    def session(self):
        """Transactional session, used as ``with manager.session() as session``."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        return _transaction(self._session_factory)

    def close(self) -> None:
        """Dispose of an owned engine and forget the session factory."""
        if self._engine is not None and self.owns_engine:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
