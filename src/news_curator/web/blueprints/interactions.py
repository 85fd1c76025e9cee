"""
Interaction API blueprint.

Request bodies are validated as a tagged union on ``interaction_type``:
comments carry ``content``, shares carry ``share_metadata``, views and likes
carry nothing else.
"""

from flask import request
from pydantic import ValidationError

from news_curator.errors import DuplicateInteraction, InvalidInteraction
from news_curator.logger import get_logger
from news_curator.models import InteractionType, parse_interaction
from news_curator.models.interaction import CommentUpdate
from news_curator.storage.database import DatabaseManager
from news_curator.storage.repositories import (
    ArticleRepository,
    InteractionRepository,
    UserRepository,
)
from news_curator.web.blueprints.base import (
    CRUDBlueprint,
    bad_body,
    json_object,
    query_int,
    validation_message,
)
from news_curator.web.serializers import api_response

logger = get_logger(__name__)


class InteractionBlueprint(CRUDBlueprint):
    """Blueprint for interaction operations."""

    resource_name = "Interaction"
    repository_class = InteractionRepository

    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager, url_prefix="/api/interactions")
        self._register_custom_routes()

    def _register_custom_routes(self):
        """Register interaction-specific routes."""
        self.blueprint.add_url_rule("/remove", view_func=self._remove, methods=["DELETE"])
        self.blueprint.add_url_rule(
            "/articles/<int:article_id>/stats",
            view_func=self._article_stats,
            methods=["GET"]
        )
        self.blueprint.add_url_rule(
            "/articles/<int:article_id>/comments",
            view_func=self._article_comments,
            methods=["GET"]
        )
        self.blueprint.add_url_rule(
            "/users/<int:user_id>/articles/<int:article_id>",
            view_func=self._user_article,
            methods=["GET"]
        )

    def _list(self):
        """List interactions filtered by user, article and type."""
        limit = query_int("limit", 20, maximum=100)
        offset = query_int("offset", 0, minimum=0)
        filters = {}
        for name in ("user_id", "article_id"):
            value = request.args.get(name, type=int)
            if value is not None:
                filters[name] = value
        interaction_type = request.args.get("interaction_type")
        if interaction_type:
            filters["interaction_type"] = interaction_type

        with self.db_manager.session() as session:
            repo = InteractionRepository(session)
            items = repo.list(limit=limit, offset=offset, **filters)
            data = [self.serialize(item) for item in items]
            total = repo.count(**filters)

        return api_response(success=True, data={"items": data, "total": total})

    def _create(self):
        """Record an interaction."""
        data = json_object()
        if not data:
            return bad_body()

        try:
            interaction = parse_interaction(data)
        except ValidationError as e:
            return api_response(success=False, error=validation_message(e), status=400)

        with self.db_manager.session() as session:
            if UserRepository(session).get_by_id(interaction.user_id) is None:
                return api_response(success=False, error="User not found", status=404)
            if ArticleRepository(session).get_by_id(interaction.article_id) is None:
                return api_response(success=False, error="Article not found", status=404)

            try:
                model = InteractionRepository(session).create(interaction)
            except DuplicateInteraction as e:
                return api_response(success=False, error=str(e), status=409)

            return api_response(
                success=True,
                data=self.serialize(model),
                message="Interaction recorded",
                status=201,
            )

    def _update(self, id: int):
        """Edit the text of a comment."""
        data = json_object()
        if data is None:
            return bad_body()

        try:
            update = CommentUpdate(**data)
        except ValidationError as e:
            return api_response(success=False, error=validation_message(e), status=400)

        with self.db_manager.session() as session:
            repo = InteractionRepository(session)
            interaction = repo.get_by_id(id)
            if not interaction:
                return self._not_found()

            try:
                interaction = repo.update_comment(interaction, update.content)
            except InvalidInteraction as e:
                return api_response(success=False, error=str(e), status=400)

            return api_response(
                success=True,
                data=self.serialize(interaction),
                message="Comment updated",
            )

    def _remove(self):
        """Remove a view, like or share by (user, article, type)."""
        data = json_object() or {}
        try:
            user_id = int(data["user_id"])
            article_id = int(data["article_id"])
            interaction_type = InteractionType(data["interaction_type"]).value
        except (KeyError, TypeError, ValueError):
            return api_response(
                success=False,
                error="user_id, article_id and a valid interaction_type are required",
                status=400,
            )

        with self.db_manager.session() as session:
            try:
                removed = InteractionRepository(session).remove(user_id, article_id, interaction_type)
            except InvalidInteraction as e:
                return api_response(success=False, error=str(e), status=400)

        if not removed:
            return self._not_found()
        return api_response(success=True, message="Interaction removed")

    def _article_stats(self, article_id: int):
        """Interaction counts by type and share counts by platform."""
        with self.db_manager.session() as session:
            if ArticleRepository(session).get_by_id(article_id) is None:
                return api_response(success=False, error="Article not found", status=404)

            repo = InteractionRepository(session)
            counts = repo.count_by_type(article_id)
            shares = repo.share_counts_by_platform(article_id)

        data = {
            "article_id": article_id,
            "counts": {kind.value: counts.get(kind.value, 0) for kind in InteractionType},
            "total": sum(counts.values()),
            "shares_by_platform": shares,
        }
        return api_response(success=True, data=data)

    def _article_comments(self, article_id: int):
        """Comments on an article, newest first."""
        limit = query_int("limit", 20, maximum=100)
        offset = query_int("offset", 0, minimum=0)

        with self.db_manager.session() as session:
            repo = InteractionRepository(session)
            comments = repo.list(
                limit=limit,
                offset=offset,
                article_id=article_id,
                interaction_type=InteractionType.COMMENT.value,
            )
            data = [self.serialize(comment) for comment in comments]

        return api_response(success=True, data=data)

    def _user_article(self, user_id: int, article_id: int):
        """Everything a user has done on an article."""
        with self.db_manager.session() as session:
            items = InteractionRepository(session).list_for_user_article(user_id, article_id)
            data = [self.serialize(item) for item in items]

        return api_response(success=True, data=data)
