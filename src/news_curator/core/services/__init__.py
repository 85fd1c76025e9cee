"""
Facade services for core modules.

This module provides unified entry points (Facade pattern) for the core business logic.
External code (web layer, scripts, etc.) should ONLY interact with these services,
not direct module classes.

Architecture Rules:
    - Web layer MUST use these services, never import from orchestrator/recommender directly
    - Each service encapsulates one functional domain
    - Services use factory functions for component creation
    - Services provide simple, high-level interfaces

Example:
    # Correct - Use service facade
    from news_curator.core.services import SummaryService, RecommendationService

    summaries = SummaryService()
    best = summaries.generate_best_summary(text)

    recommendations = RecommendationService(session)
    items = recommendations.get_recommendations(user_id, limit=10)

    # Wrong - Direct import (forbidden)
    from news_curator.core.orchestrator import ProviderFallbackOrchestrator  # VIOLATION
"""

from news_curator.core.services.recommendation_service import (
    RecommendationService,
    create_recommendation_service,
)
from news_curator.core.services.summary_service import (
    ArticleSummary,
    SummaryService,
    create_summary_service,
)

__all__ = [
    # Services
    "SummaryService",
    "RecommendationService",
    # Factory functions
    "create_summary_service",
    "create_recommendation_service",
    # Result types
    "ArticleSummary",
]
