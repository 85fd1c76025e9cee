"""Tests for the service facades."""

import pytest

from news_curator.config import ProviderSettings
from news_curator.core.services import create_recommendation_service, create_summary_service
from news_curator.core.summarizer import SummaryOptions

ARTICLE_BODY = (
    "Artificial intelligence is reshaping newsrooms around the world. "
    "Editors now rely on machine learning models to sort incoming wire stories. "
    "Reporters use transcription tools that save hours of manual work every week. "
    "Critics worry that automated curation narrows the range of voices readers see. "
    "Publishers say human judgment still decides what reaches the front page."
)


@pytest.fixture
def summary_service():
    """Summary service with no remote providers configured."""
    return create_summary_service(settings=ProviderSettings(ollama_base_url=None))


class TestSummaryService:
    """Tests for SummaryService."""

    def test_generate_summary(self, summary_service):
        summary = summary_service.generate_summary(ARTICLE_BODY, SummaryOptions(max_sentences=2))
        assert summary
        assert summary.count("  ") == 0

    def test_generate_best_summary_falls_back(self, summary_service):
        best = summary_service.generate_best_summary(ARTICLE_BODY)
        assert best.method == "extractive"
        assert best.to_dict()["model"] == "tf-idf"

    def test_article_keeps_supplied_summary(self, summary_service):
        result = summary_service.generate_summary_for_article(ARTICLE_BODY, "  Written by hand.  ")

        assert result.to_dict() == {
            "summary": "Written by hand.",
            "generated": False,
            "provider": "user-provided",
            "model": "none",
            "method": "extractive",
        }

    def test_article_without_summary_is_generated(self, summary_service):
        result = summary_service.generate_summary_for_article(ARTICLE_BODY, "   ")

        assert result.generated
        assert result.provider == "extractive"
        assert result.summary

    def test_check_providers(self, summary_service):
        statuses = summary_service.check_providers()

        assert set(statuses) == {"ollama", "cohere", "huggingface", "openai", "extractive"}
        assert statuses["extractive"].available
        assert not statuses["ollama"].available


class TestRecommendationService:
    """Tests for RecommendationService."""

    def test_trending_articles(self, db_session, make_user, make_article, interact):
        reader = make_user("reader")
        article = make_article()
        interact(reader, article, "like")

        service = create_recommendation_service(db_session)

        assert [a.id for a in service.get_trending_articles()] == [article.id]
        [item] = service.get_trending_with_stats()
        assert item.stats.to_dict()["likes"] == 1

    def test_recommendations(self, db_session, make_user, make_article):
        reader = make_user("reader", interests=["ai"])
        article = make_article(tags=["ai"])

        [recommendation] = create_recommendation_service(db_session).get_recommendations(reader.id)

        assert recommendation.article.id == article.id


class TestCoreBoundary:
    """Tests for the core package's facade-only surface."""

    def test_engine_lookup_points_to_facade(self):
        import news_curator.core as core

        with pytest.raises(ImportError, match="create_recommendation_service"):
            core.RecommendationScorer

    def test_unknown_attribute(self):
        import news_curator.core as core

        with pytest.raises(AttributeError):
            core.NotAThing
