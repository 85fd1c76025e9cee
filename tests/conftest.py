"""Shared pytest fixtures."""

from datetime import datetime
from typing import Optional

import pytest
from sqlalchemy.orm import Session

from news_curator.models import ArticleCreate, UserCreate, parse_interaction
from news_curator.storage.database import DatabaseManager
from news_curator.storage.repositories import (
    ArticleRepository,
    InteractionRepository,
    UserRepository,
)

ARTICLE_BODY = (
    "Artificial intelligence is reshaping newsrooms around the world. "
    "Editors now rely on machine learning models to sort incoming wire stories. "
    "Reporters use transcription tools that save hours of manual work every week. "
    "Critics worry that automated curation narrows the range of voices readers see. "
    "Publishers say human judgment still decides what reaches the front page."
)


@pytest.fixture
def db_manager(tmp_path):
    """Create a test database manager backed by a temporary SQLite file."""
    manager = DatabaseManager(str(tmp_path / "test.db"))
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture
def db_session(db_manager: DatabaseManager) -> Session:
    """Create a test database session."""
    with db_manager.session() as session:
        yield session


@pytest.fixture
def make_user(db_session: Session):
    """Factory fixture creating users."""

    def _make_user(username: str, interests: Optional[list[str]] = None):
        return UserRepository(db_session).create(
            UserCreate(username=username, interests=interests or [])
        )

    return _make_user


@pytest.fixture
def make_article(db_session: Session):
    """Factory fixture creating articles."""

    def _make_article(
        title: str = "Test article",
        author: str = "Alice",
        tags: Optional[list[str]] = None,
        created_at: Optional[datetime] = None,
        content: str = ARTICLE_BODY,
    ):
        return ArticleRepository(db_session).create(
            ArticleCreate(
                title=title,
                author=author,
                tags=tags or [],
                content=content,
                created_at=created_at,
            )
        )

    return _make_article


@pytest.fixture
def interact(db_session: Session):
    """Factory fixture recording interactions."""

    def _interact(user, article, interaction_type: str, **payload):
        data = {
            "user_id": user.id,
            "article_id": article.id,
            "interaction_type": interaction_type,
            **payload,
        }
        return InteractionRepository(db_session).create(parse_interaction(data))

    return _interact
