"""
User API blueprint.
"""

from news_curator.models.user import UserCreate, UserUpdate
from news_curator.storage.database import DatabaseManager
from news_curator.storage.repositories.user_repo import UserRepository
from news_curator.web.blueprints.base import CRUDBlueprint


class UserBlueprint(CRUDBlueprint):
    """Blueprint for user CRUD operations."""

    resource_name = "User"
    repository_class = UserRepository
    create_schema = UserCreate
    update_schema = UserUpdate

    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager, url_prefix="/api/users")

    def check_exists(self, repository: UserRepository, data: UserCreate) -> bool:
        """Usernames are unique."""
        return repository.get_by_username(data.username) is not None
