"""
Recommendation API blueprint.
"""

from flask import Blueprint

from news_curator.config import get_config
from news_curator.core.services import RecommendationService
from news_curator.errors import UserNotFound
from news_curator.storage.database import DatabaseManager
from news_curator.web.blueprints.base import query_int
from news_curator.web.serializers import SerializerRegistry, api_response


class RecommendationBlueprint:
    """Blueprint for personalized and trending recommendations."""

    def __init__(self, db_manager: DatabaseManager):
        """Initialize the recommendation blueprint.

        Args:
            db_manager: Database manager shared by the application
        """
        self.db_manager = db_manager
        self.blueprint = Blueprint(
            "recommendations", __name__, url_prefix="/api/recommendations"
        )
        self.blueprint.add_url_rule("/trending", view_func=self._trending, methods=["GET"])
        self.blueprint.add_url_rule(
            "/<int:user_id>", view_func=self._for_user, methods=["GET"]
        )

    def _for_user(self, user_id: int):
        """Recommendations for a user."""
        config = get_config().recommender
        limit = query_int("limit", config.default_limit, maximum=config.max_limit)

        with self.db_manager.session() as session:
            try:
                items = RecommendationService(session).get_recommendations(user_id, limit=limit)
            except UserNotFound as e:
                return api_response(success=False, error=str(e), status=404)
            data = SerializerRegistry.serialize_list("recommendation", items)

        return api_response(success=True, data=data)

    def _trending(self):
        """Trending articles in the trailing window."""
        config = get_config().trending
        limit = query_int("limit", config.default_limit, maximum=config.max_limit)
        hours = query_int("hours", config.window_hours, maximum=config.max_window_hours)

        with self.db_manager.session() as session:
            items = RecommendationService(session).get_trending_with_stats(
                limit=limit, window_hours=hours
            )
            data = SerializerRegistry.serialize_list("trending", items)

        return api_response(success=True, data=data)
