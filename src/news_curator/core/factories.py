"""
Factory functions for creating core components with proper dependency injection.

This module provides a centralized location for creating all core components
with consistent configuration from the config system.

Usage:
    from news_curator.core.factories import (
        create_extractive_summarizer,
        create_orchestrator,
        create_recommendation_scorer,
        create_trending_aggregator,
    )

    # Create with default configuration
    summarizer = create_extractive_summarizer()

    # Create with overrides
    summarizer = create_extractive_summarizer(max_sentences=5)
"""

from typing import Optional

import httpx
from sqlalchemy.orm import Session

from news_curator.config import ProviderSettings, get_config
from news_curator.core.orchestrator import ProviderFallbackOrchestrator
from news_curator.core.providers import SummaryProvider
from news_curator.core.recommender import RecommendationScorer
from news_curator.core.summarizer import ExtractiveSummarizer, SummaryOptions
from news_curator.core.trending import TrendingAggregator
from news_curator.core.validation import SummaryValidator


def create_summary_options(**overrides) -> SummaryOptions:
    """Create SummaryOptions from the summarizer config.

    Args:
        **overrides: Option values that replace the configured defaults;
            ``None`` values are ignored

    Returns:
        SummaryOptions instance
    """
    config = get_config().summarizer
    values = {
        "max_sentences": config.max_sentences,
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
        "max_length": config.max_length,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return SummaryOptions(**values)


def create_extractive_summarizer(max_sentences: Optional[int] = None) -> ExtractiveSummarizer:
    """Create a configured ExtractiveSummarizer instance.

    Args:
        max_sentences: Override default number of sentences

    Returns:
        Configured ExtractiveSummarizer instance
    """
    config = get_config().summarizer
    return ExtractiveSummarizer(
        max_sentences=max_sentences or config.max_sentences,
        min_sentence_chars=config.min_sentence_chars,
        min_sentence_words=config.min_sentence_words,
    )


def create_orchestrator(
    settings: Optional[ProviderSettings] = None,
    providers: Optional[list[SummaryProvider]] = None,
    client: Optional[httpx.Client] = None,
) -> ProviderFallbackOrchestrator:
    """Create a configured ProviderFallbackOrchestrator instance.

    Args:
        settings: Provider settings (from config if omitted)
        providers: Explicit provider chain
        client: Shared httpx client for provider calls

    Returns:
        Configured ProviderFallbackOrchestrator instance
    """
    return ProviderFallbackOrchestrator(
        settings=settings or get_config().providers,
        providers=providers,
        extractor=create_extractive_summarizer(),
        validator=SummaryValidator(),
        client=client,
    )


def create_recommendation_scorer(session: Session) -> RecommendationScorer:
    """Create a configured RecommendationScorer instance.

    Args:
        session: Database session

    Returns:
        Configured RecommendationScorer instance
    """
    return RecommendationScorer(session=session, config=get_config().recommender)


def create_trending_aggregator(session: Session) -> TrendingAggregator:
    """Create a configured TrendingAggregator instance.

    Args:
        session: Database session

    Returns:
        Configured TrendingAggregator instance
    """
    return TrendingAggregator(session=session, config=get_config().trending)
