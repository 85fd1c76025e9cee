"""
Facade for recommendation and trending operations.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy.orm import Session

from news_curator.logger import get_logger

if TYPE_CHECKING:
    from news_curator.core.recommender import Recommendation
    from news_curator.core.trending import TrendingArticle
    from news_curator.models import ArticleModel


class RecommendationService:
    """Facade for recommendation and trending operations.

    Provides unified interface for personalized recommendations and
    trending articles.
    """

    def __init__(self, session: Session):
        """Initialize recommendation service.

        Args:
            session: Database session
        """
        from news_curator.core.factories import (
            create_recommendation_scorer,
            create_trending_aggregator,
        )

        self._scorer = create_recommendation_scorer(session)
        self._trending = create_trending_aggregator(session)
        self._logger = get_logger(__name__)

    def get_recommendations(
        self, user_id: int, limit: Optional[int] = None, now: Optional[datetime] = None
    ) -> list["Recommendation"]:
        """Get recommendations for a user.

        Args:
            user_id: User ID
            limit: Number of recommendations
            now: Reference time for freshness

        Returns:
            Recommendations, best first

        Raises:
            UserNotFound: If the user does not exist
        """
        return self._scorer.get_recommendations(user_id, limit=limit, now=now)

    def get_trending_with_stats(
        self,
        limit: Optional[int] = None,
        window_hours: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list["TrendingArticle"]:
        """Get trending articles together with their engagement stats."""
        return self._trending.get_trending_articles(limit=limit, window_hours=window_hours, now=now)

    def get_trending_articles(
        self,
        limit: Optional[int] = None,
        window_hours: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list["ArticleModel"]:
        """Get trending articles, most engaged first."""
        return [
            item.article
            for item in self.get_trending_with_stats(limit=limit, window_hours=window_hours, now=now)
        ]


def create_recommendation_service(session: Session) -> RecommendationService:
    """Create a RecommendationService instance.

    Args:
        session: Database session

    Returns:
        Configured RecommendationService
    """
    return RecommendationService(session=session)
