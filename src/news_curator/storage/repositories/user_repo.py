"""
User repository for database operations.
"""

from typing import Optional

from sqlalchemy.orm import Session

from news_curator.models import UserModel
from news_curator.models.user import UserCreate, UserUpdate
from news_curator.storage.mixins import JSONListFieldMixin
from news_curator.storage.repositories.base import BaseRepository


class UserRepository(
    BaseRepository[UserModel, UserCreate, UserUpdate],
    JSONListFieldMixin,
):
    """Repository for User CRUD operations."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, UserModel)

    json_list_fields = frozenset({"interests"})

    def create(self, user_data: UserCreate) -> UserModel:
        """Create a new user."""
        data_dict = self._encode_list_fields(user_data.model_dump())

        user = UserModel(**data_dict)
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user

    def update(self, user: UserModel, user_data: UserUpdate) -> UserModel:
        """Update a user's interests."""
        update_data = user_data.model_dump(exclude_unset=True)
        update_data = self._encode_list_fields(update_data)

        for field, value in update_data.items():
            setattr(user, field, value)

        self.session.flush()
        self.session.refresh(user)
        return user

    def get_by_username(self, username: str) -> Optional[UserModel]:
        """Get a user by username."""
        return self.session.query(UserModel).filter(UserModel.username == username).first()
