"""Data models for News Curator."""

from news_curator.models.article import (
    ArticleCreate,
    ArticleModel,
    ArticleUpdate,
)
from news_curator.models.base import Base
from news_curator.models.interaction import (
    CommentInteraction,
    CommentUpdate,
    InteractionCreate,
    InteractionModel,
    InteractionType,
    LikeInteraction,
    ShareInteraction,
    ShareMetadata,
    SharePlatform,
    ViewInteraction,
    parse_interaction,
)
from news_curator.models.user import UserCreate, UserModel, UserUpdate

__all__ = [
    "Base",
    "ArticleModel",
    "ArticleCreate",
    "ArticleUpdate",
    "UserModel",
    "UserCreate",
    "UserUpdate",
    "InteractionModel",
    "InteractionType",
    "InteractionCreate",
    "ViewInteraction",
    "LikeInteraction",
    "ShareInteraction",
    "ShareMetadata",
    "SharePlatform",
    "CommentInteraction",
    "CommentUpdate",
    "parse_interaction",
]
