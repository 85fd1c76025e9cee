"""
User data model.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from news_curator.models.base import Base, load_json_list, normalize_terms


class UserModel(Base):
    """SQLAlchemy ORM model for User."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False, index=True)
    interests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # JSON string of interests

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    @property
    def interest_list(self) -> list[str]:
        """Interests decoded from their JSON column."""
        return load_json_list(self.interests)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username='{self.username}')>"


class UserCreate(BaseModel):
    """Schema for creating a new user."""

    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9_]+$")
    interests: list[str] = Field(default_factory=list, description="Lowercase interest terms")

    @field_validator("interests")
    @classmethod
    def normalize_interests(cls, v: list[str]) -> list[str]:
        """Lowercase, trim and bound interest terms."""
        terms = normalize_terms(v)
        for term in terms:
            if len(term) > 50:
                raise ValueError(f"Interest too long (max 50 characters): {term[:20]}...")
        return terms


class UserUpdate(BaseModel):
    """Schema for updating a user."""

    interests: Optional[list[str]] = None

    @field_validator("interests")
    @classmethod
    def normalize_interests(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Lowercase and trim interest terms."""
        return normalize_terms(v) if v is not None else None
