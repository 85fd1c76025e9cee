"""
Personalized article recommendations.

Candidates are the newest articles the user has not interacted with. Each
candidate is scored independently from four signals (interest match,
popularity, freshness and author reputation), then the best are returned.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from news_curator.config import RecommenderConfig
from news_curator.core.signals import (
    author_score,
    combine_scores,
    freshness_score,
    interest_score,
    matching_interests,
    popularity_score,
)
from news_curator.errors import UserNotFound
from news_curator.logger import get_logger
from news_curator.models import ArticleModel
from news_curator.storage.repositories import (
    ArticleRepository,
    InteractionRepository,
    UserRepository,
)

logger = get_logger(__name__)

POPULAR_THRESHOLD = 0.7
RECENT_THRESHOLD = 0.8
POPULAR_AUTHOR_THRESHOLD = 0.7
GENERIC_REASON = "General recommendation"


@dataclass
class Recommendation:
    """A scored candidate article."""

    article: ArticleModel
    score: float
    reasons: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"<Recommendation(article_id={self.article.id}, score={self.score})>"


class RecommendationScorer:
    """Scores and ranks candidate articles for a user."""

    def __init__(self, session: Session, config: Optional[RecommenderConfig] = None) -> None:
        """Initialize the scorer.

        Args:
            session: Database session used for all lookups
            config: Recommender configuration
        """
        self.config = config or RecommenderConfig()
        self.users = UserRepository(session)
        self.articles = ArticleRepository(session)
        self.interactions = InteractionRepository(session)
        self._popularity_cache: dict[int, float] = {}

    def popularity(self, article_id: int) -> float:
        """All-time popularity of an article."""
        if article_id not in self._popularity_cache:
            counts = self.interactions.count_by_type(article_id)
            self._popularity_cache[article_id] = popularity_score(counts)
        return self._popularity_cache[article_id]

    def _preload_popularity(self, article_ids: list[int]) -> None:
        missing = [a for a in article_ids if a not in self._popularity_cache]
        counts = self.interactions.counts_by_article_and_type(article_ids=missing)
        for article_id in missing:
            self._popularity_cache[article_id] = popularity_score(counts.get(article_id, {}))

    def author_reputation(self, article: ArticleModel) -> float:
        """Mean popularity of the author's other recent articles."""
        history = self.articles.list_by_author(
            article.author, limit=self.config.author_history, exclude_id=article.id
        )
        self._preload_popularity([other.id for other in history])
        return author_score([self.popularity(other.id) for other in history])

    def score(
        self, interests: list[str], article: ArticleModel, now: Optional[datetime] = None
    ) -> Recommendation:
        """Score one candidate article for a set of interests."""
        tags = article.tag_list

        interest = interest_score(interests, tags)
        popularity = self.popularity(article.id)
        freshness = freshness_score(article.created_at, now)
        author = self.author_reputation(article)

        reasons = []
        if interest > 0:
            reasons.append(f"Matches your interests: {', '.join(matching_interests(interests, tags))}")
        if popularity > POPULAR_THRESHOLD:
            reasons.append("Popular among users")
        if freshness > RECENT_THRESHOLD:
            reasons.append("Recent content")
        if author > POPULAR_AUTHOR_THRESHOLD:
            reasons.append("From popular author")
        if not reasons:
            reasons.append(GENERIC_REASON)

        return Recommendation(
            article=article,
            score=combine_scores(interest, popularity, freshness, author),
            reasons=reasons,
        )

    def get_recommendations(
        self, user_id: int, limit: Optional[int] = None, now: Optional[datetime] = None
    ) -> list[Recommendation]:
        """Recommend articles for a user.

        Args:
            user_id: User to recommend for
            limit: Number of recommendations (config default if omitted)
            now: Reference time for freshness

        Returns:
            Recommendations sorted by score, highest first; equal scores keep
            the candidate order (newest article first)

        Raises:
            UserNotFound: If the user does not exist
        """
        user = self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)

        limit = min(limit or self.config.default_limit, self.config.max_limit)
        seen = self.interactions.article_ids_for_user(user_id)
        candidates = self.articles.list_excluding(
            seen, limit=limit * self.config.candidate_multiplier
        )
        if not candidates:
            logger.debug(f"No candidate articles for user {user_id}")
            return []

        self._preload_popularity([article.id for article in candidates])
        interests = user.interest_list

        scored = [self.score(interests, article, now) for article in candidates]
        scored.sort(key=lambda item: item.score, reverse=True)

        recommendations = scored[:limit]
        for item in recommendations:
            item.score = round(item.score, 2)

        logger.info(
            f"Recommended {len(recommendations)} of {len(candidates)} candidates for user {user_id}"
        )
        return recommendations
