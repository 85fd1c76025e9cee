"""API blueprints for the News Curator web app."""

from news_curator.web.blueprints.articles import ArticleBlueprint
from news_curator.web.blueprints.base import CRUDBlueprint
from news_curator.web.blueprints.interactions import InteractionBlueprint
from news_curator.web.blueprints.recommendations import RecommendationBlueprint
from news_curator.web.blueprints.summaries import SummaryBlueprint
from news_curator.web.blueprints.users import UserBlueprint

__all__ = [
    "CRUDBlueprint",
    "ArticleBlueprint",
    "UserBlueprint",
    "InteractionBlueprint",
    "RecommendationBlueprint",
    "SummaryBlueprint",
]
