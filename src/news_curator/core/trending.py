"""
Trending articles over a trailing time window.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from news_curator.config import TrendingConfig
from news_curator.core.signals import weighted_engagement
from news_curator.logger import get_logger
from news_curator.models import ArticleModel
from news_curator.storage.repositories import ArticleRepository, InteractionRepository

logger = get_logger(__name__)


@dataclass
class EngagementStats:
    """Windowed interaction counts for one article."""

    article_id: int
    counts: dict[str, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def engagement(self) -> int:
        return weighted_engagement(self.counts)

    def to_dict(self) -> dict:
        return {
            "views": self.counts.get("view", 0),
            "likes": self.counts.get("like", 0),
            "shares": self.counts.get("share", 0),
            "comments": self.counts.get("comment", 0),
            "total_interactions": self.total,
            "engagement_score": self.engagement,
        }


@dataclass
class TrendingArticle:
    """An article with the engagement that made it trend."""

    article: ArticleModel
    stats: EngagementStats


def rank_engagement(grouped: dict[int, dict[str, int]]) -> list[EngagementStats]:
    """Order articles by engagement, then raw interaction count.

    Article id breaks the remaining ties so the order is deterministic.
    """
    stats = [EngagementStats(article_id, counts) for article_id, counts in grouped.items()]
    stats.sort(key=lambda s: (-s.engagement, -s.total, s.article_id))
    return stats


class TrendingAggregator:
    """Ranks articles by recent weighted engagement."""

    def __init__(self, session: Session, config: Optional[TrendingConfig] = None) -> None:
        self.config = config or TrendingConfig()
        self.articles = ArticleRepository(session)
        self.interactions = InteractionRepository(session)

    def get_trending_articles(
        self,
        limit: Optional[int] = None,
        window_hours: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[TrendingArticle]:
        """Get the most engaged-with articles in the window.

        Args:
            limit: Number of articles to return
            window_hours: Trailing window length (config default if omitted)
            now: End of the window

        Returns:
            Trending articles, most engaged first
        """
        limit = limit or self.config.default_limit
        window_hours = window_hours or self.config.window_hours
        since = (now or datetime.utcnow()) - timedelta(hours=window_hours)

        grouped = self.interactions.counts_by_article_and_type(since=since)
        top = rank_engagement(grouped)[:limit]

        articles = self.articles.get_by_ids([s.article_id for s in top])
        trending = [
            TrendingArticle(article=articles[s.article_id], stats=s)
            for s in top
            if s.article_id in articles
        ]

        logger.debug(f"{len(trending)} trending articles in the last {window_hours}h")
        return trending
