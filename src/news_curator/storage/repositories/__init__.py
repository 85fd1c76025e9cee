"""Repository pattern implementations for data access."""

from news_curator.storage.repositories.article_repo import ArticleRepository
from news_curator.storage.repositories.interaction_repo import InteractionRepository
from news_curator.storage.repositories.user_repo import UserRepository

__all__ = [
    "ArticleRepository",
    "InteractionRepository",
    "UserRepository",
]
