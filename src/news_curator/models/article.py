"""
Article data model.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from news_curator.models.base import Base, load_json_list, normalize_terms

MIN_CONTENT_LENGTH = 50


class ArticleModel(Base):
    """SQLAlchemy ORM model for Article."""

    __tablename__ = "articles"

    __table_args__ = (
        Index("ix_articles_author_created", "author", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # JSON string of tags

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    @property
    def tag_list(self) -> list[str]:
        """Tags decoded from their JSON column."""
        return load_json_list(self.tags)

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, title='{self.title}', author='{self.author}')>"


# Pydantic models for API


class ArticleBase(BaseModel):
    """Base Article schema."""

    title: str = Field(..., min_length=1, max_length=200, description="Article title")
    content: str = Field(..., min_length=MIN_CONTENT_LENGTH, description="Article body text")
    author: str = Field(..., min_length=1, max_length=100, description="Author name")
    summary: Optional[str] = Field(None, max_length=500, description="Optional user-supplied summary")
    tags: list[str] = Field(default_factory=list, description="Lowercase tags")

    @field_validator("title", "author", "content")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Trim surrounding whitespace."""
        return v.strip()

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Lowercase and trim tags."""
        return normalize_terms(v)


class ArticleCreate(ArticleBase):
    """Schema for creating a new article."""

    created_at: Optional[datetime] = Field(None, description="Override creation time (imports)")


class ArticleUpdate(BaseModel):
    """Schema for updating an article."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=MIN_CONTENT_LENGTH)
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    summary: Optional[str] = Field(None, max_length=500)
    tags: Optional[list[str]] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Lowercase and trim tags."""
        return normalize_terms(v) if v is not None else None
