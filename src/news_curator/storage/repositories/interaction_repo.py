"""
Interaction repository for database operations.
"""

from collections import defaultdict
from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from news_curator.errors import DuplicateInteraction, InvalidInteraction
from news_curator.models import InteractionModel, InteractionType
from news_curator.models.interaction import (
    CommentInteraction,
    CommentUpdate,
    InteractionCreate,
    ShareInteraction,
)
from news_curator.storage.repositories.base import BaseRepository


class InteractionRepository(BaseRepository[InteractionModel, BaseModel, CommentUpdate]):
    """Repository for Interaction records and their aggregations."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, InteractionModel)

    def create(self, interaction: InteractionCreate) -> InteractionModel:
        """Record an interaction.

        Args:
            interaction: Tagged-union interaction variant

        Returns:
            Created InteractionModel instance

        Raises:
            DuplicateInteraction: If a view/like/share already exists for
                the same user, article and type.
        """
        interaction_type = interaction.interaction_type
        if interaction_type != InteractionType.COMMENT.value:
            existing = self.get_by_key(interaction.user_id, interaction.article_id, interaction_type)
            if existing is not None:
                raise DuplicateInteraction(interaction.user_id, interaction.article_id, interaction_type)

        model = InteractionModel(
            user_id=interaction.user_id,
            article_id=interaction.article_id,
            interaction_type=interaction_type,
        )
        if isinstance(interaction, CommentInteraction):
            model.content = interaction.content
        elif isinstance(interaction, ShareInteraction):
            model.share_platform = interaction.share_metadata.platform.value
            model.share_message = interaction.share_metadata.message

        self.session.add(model)
        try:
            self.session.flush()
        except IntegrityError as e:
            # Unique index caught a concurrent insert of the same key
            self.session.rollback()
            if interaction_type == InteractionType.COMMENT.value:
                raise
            raise DuplicateInteraction(
                interaction.user_id, interaction.article_id, interaction_type
            ) from e

        self.session.refresh(model)
        return model

    def get_by_key(
        self, user_id: int, article_id: int, interaction_type: str
    ) -> Optional[InteractionModel]:
        """Get the first interaction for a (user, article, type) key."""
        return (
            self.session.query(InteractionModel)
            .filter(
                InteractionModel.user_id == user_id,
                InteractionModel.article_id == article_id,
                InteractionModel.interaction_type == interaction_type,
            )
            .first()
        )

    def remove(self, user_id: int, article_id: int, interaction_type: str) -> bool:
        """Remove a view/like/share by its key.

        Returns:
            True if an interaction was deleted

        Raises:
            InvalidInteraction: For comments, which must be deleted by id.
        """
        if interaction_type == InteractionType.COMMENT.value:
            raise InvalidInteraction("Comments must be deleted by id")

        interaction = self.get_by_key(user_id, article_id, interaction_type)
        if interaction is None:
            return False
        self.delete(interaction)
        return True

    def update_comment(self, interaction: InteractionModel, content: str) -> InteractionModel:
        """Replace a comment's text.

        Raises:
            InvalidInteraction: If the interaction is not a comment.
        """
        if interaction.interaction_type != InteractionType.COMMENT.value:
            raise InvalidInteraction(
                f"Only comments can be edited, not {interaction.interaction_type}"
            )
        interaction.content = content
        self.session.flush()
        self.session.refresh(interaction)
        return interaction

    def list_for_user_article(self, user_id: int, article_id: int) -> list[InteractionModel]:
        """All interactions a user has on an article, newest first."""
        return (
            self.session.query(InteractionModel)
            .filter(
                InteractionModel.user_id == user_id,
                InteractionModel.article_id == article_id,
            )
            .order_by(desc(InteractionModel.created_at), desc(InteractionModel.id))
            .all()
        )

    def article_ids_for_user(self, user_id: int) -> set[int]:
        """Ids of every article the user has interacted with, any type."""
        rows = (
            self.session.query(InteractionModel.article_id)
            .filter(InteractionModel.user_id == user_id)
            .distinct()
            .all()
        )
        return {article_id for (article_id,) in rows}

    def count_by_type(self, article_id: int) -> dict[str, int]:
        """Interaction counts by type for one article (all time)."""
        return self.counts_by_article_and_type(article_ids=[article_id]).get(article_id, {})

    def counts_by_article_and_type(
        self,
        since: Optional[datetime] = None,
        article_ids: Optional[list[int]] = None,
    ) -> dict[int, dict[str, int]]:
        """Grouped interaction counts.

        Args:
            since: Only count interactions created at or after this time
            article_ids: Restrict to these articles

        Returns:
            Mapping of article id to {interaction type: count}
        """
        query = self.session.query(
            InteractionModel.article_id,
            InteractionModel.interaction_type,
            func.count(InteractionModel.id),
        )
        if since is not None:
            query = query.filter(InteractionModel.created_at >= since)
        if article_ids is not None:
            if not article_ids:
                return {}
            query = query.filter(InteractionModel.article_id.in_(article_ids))

        rows = query.group_by(InteractionModel.article_id, InteractionModel.interaction_type).all()

        counts: dict[int, dict[str, int]] = defaultdict(dict)
        for article_id, interaction_type, count in rows:
            counts[article_id][interaction_type] = count
        return dict(counts)

    def share_counts_by_platform(self, article_id: int) -> dict[str, int]:
        """Share counts per platform for an article, most shared first."""
        rows = (
            self.session.query(InteractionModel.share_platform, func.count(InteractionModel.id))
            .filter(
                InteractionModel.article_id == article_id,
                InteractionModel.interaction_type == InteractionType.SHARE.value,
            )
            .group_by(InteractionModel.share_platform)
            .order_by(desc(func.count(InteractionModel.id)))
            .all()
        )
        return {platform: count for platform, count in rows}
