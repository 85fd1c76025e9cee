"""
Interaction data model.

Interactions are stored in one table but exchanged as a tagged union: each
interaction type only carries the payload that belongs to it (comment text
for comments, share metadata for shares, nothing for views and likes).
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator
from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from news_curator.models.base import Base


class InteractionType(str, Enum):
    """Closed set of interaction types."""

    VIEW = "view"
    LIKE = "like"
    SHARE = "share"
    COMMENT = "comment"


class SharePlatform(str, Enum):
    """Platforms an article can be shared to."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    EMAIL = "email"
    COPY_LINK = "copy_link"
    WHATSAPP = "whatsapp"


class InteractionModel(Base):
    """SQLAlchemy ORM model for Interaction."""

    __tablename__ = "interactions"

    __table_args__ = (
        Index("ix_interactions_user_article", "user_id", "article_id"),
        Index("ix_interactions_article_type", "article_id", "interaction_type"),
        Index("ix_interactions_user_type", "user_id", "interaction_type"),
        # One view/like/share per (user, article); comments are unbounded
        Index(
            "uq_interactions_user_article_type",
            "user_id",
            "article_id",
            "interaction_type",
            unique=True,
            sqlite_where=text("interaction_type != 'comment'"),
            postgresql_where=text("interaction_type != 'comment'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    article_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    interaction_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Variant payloads
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    share_platform: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    share_message: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<InteractionModel(id={self.id}, user_id={self.user_id}, "
            f"article_id={self.article_id}, type='{self.interaction_type}')>"
        )


# Pydantic tagged union for API


class InteractionBase(BaseModel):
    """Fields common to every interaction variant."""

    user_id: int = Field(..., ge=1, description="User ID")
    article_id: int = Field(..., ge=1, description="Article ID")


class ViewInteraction(InteractionBase):
    """Article was opened."""

    interaction_type: Literal["view"] = "view"


class LikeInteraction(InteractionBase):
    """Article was liked."""

    interaction_type: Literal["like"] = "like"


class ShareMetadata(BaseModel):
    """Where and how an article was shared."""

    platform: SharePlatform
    message: Optional[str] = Field(None, max_length=500)

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: Optional[str]) -> Optional[str]:
        """Trim the share message, dropping it when blank."""
        if v is None:
            return None
        return v.strip() or None


class ShareInteraction(InteractionBase):
    """Article was shared to a platform."""

    interaction_type: Literal["share"] = "share"
    share_metadata: ShareMetadata


class CommentInteraction(InteractionBase):
    """Free-text comment on an article."""

    interaction_type: Literal["comment"] = "comment"
    content: str = Field(..., max_length=1000)

    @field_validator("content")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Comments must contain non-blank text."""
        v = v.strip()
        if not v:
            raise ValueError("Comment content is required for comment interactions")
        return v


InteractionCreate = Annotated[
    Union[ViewInteraction, LikeInteraction, ShareInteraction, CommentInteraction],
    Field(discriminator="interaction_type"),
]

_interaction_adapter: TypeAdapter = TypeAdapter(InteractionCreate)


def parse_interaction(data: dict) -> InteractionCreate:
    """Validate a raw payload into its interaction variant.

    Raises:
        pydantic.ValidationError: If the type is unknown or the payload does
            not match the variant.
    """
    return _interaction_adapter.validate_python(data)


class CommentUpdate(BaseModel):
    """Schema for editing a comment's text."""

    content: str = Field(..., max_length=1000)

    @field_validator("content")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Edited comments must contain non-blank text."""
        v = v.strip()
        if not v:
            raise ValueError("Comment content cannot be empty")
        return v
