"""Curation logic: summaries, recommendations and trending.

Callers outside ``news_curator.core`` (blueprints, scripts) go through the
two service facades and never construct the engines behind them:

    from news_curator.core import create_summary_service

    best = create_summary_service().generate_best_summary(text)

``SummaryService`` wraps the extractive summarizer and the provider chain;
``RecommendationService`` wraps the scorer and the trending aggregator.
Asking this package for one of those engines raises ImportError.
"""

from news_curator.core.services import (
    ArticleSummary,
    RecommendationService,
    SummaryService,
    create_recommendation_service,
    create_summary_service,
)

# Value types returned by the facades
from news_curator.core.orchestrator import BestSummary, ProviderStatus
from news_curator.core.recommender import Recommendation
from news_curator.core.summarizer import SummaryOptions
from news_curator.core.trending import EngagementStats, TrendingArticle

__all__ = [
    "SummaryService",
    "RecommendationService",
    "create_summary_service",
    "create_recommendation_service",
    "ArticleSummary",
    "BestSummary",
    "ProviderStatus",
    "Recommendation",
    "SummaryOptions",
    "EngagementStats",
    "TrendingArticle",
]

_FACADE_FOR = {
    "ProviderFallbackOrchestrator": "SummaryService",
    "ExtractiveSummarizer": "SummaryService",
    "RecommendationScorer": "RecommendationService",
    "TrendingAggregator": "RecommendationService",
}


def __getattr__(name: str):
    facade = _FACADE_FOR.get(name)
    if facade is not None:
        raise ImportError(
            f"{name} is internal to news_curator.core; use {facade} "
            f"(create_{facade[:-7].lower()}_service) instead"
        )
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
