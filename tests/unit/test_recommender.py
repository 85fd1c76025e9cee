"""Tests for the recommendation scorer."""

from datetime import datetime, timedelta

import pytest

from news_curator.config import RecommenderConfig
from news_curator.core.recommender import RecommendationScorer
from news_curator.errors import UserNotFound


@pytest.fixture
def scorer(db_session) -> RecommendationScorer:
    return RecommendationScorer(db_session)


class TestGetRecommendations:
    """Tests for RecommendationScorer.get_recommendations."""

    def test_combined_score(self, scorer, make_user, make_article, interact):
        """Test a candidate scored from all four signals."""
        now = datetime.utcnow()
        reader = make_user("reader", interests=["ai"])
        fan = make_user("fan")
        casual = make_user("casual")

        candidate = make_article(
            title="Neural nets", tags=["ai", "technology"], created_at=now - timedelta(days=2)
        )
        older = make_article(title="Older piece", created_at=now - timedelta(days=3))

        # Candidate popularity: 1 + 3 + 5 + 10 * 4 + 1 = 50
        interact(fan, candidate, "view")
        interact(fan, candidate, "like")
        interact(fan, candidate, "share", share_metadata={"platform": "twitter"})
        for i in range(10):
            interact(fan, candidate, "comment", content=f"Comment {i}")
        interact(casual, candidate, "view")

        # Author's other article: 20 * 4 = 80
        for i in range(20):
            interact(fan, older, "comment", content=f"Great read {i}")

        recommendations = scorer.get_recommendations(reader.id, now=now)

        top = recommendations[0]
        assert top.article.id == candidate.id
        assert top.score == pytest.approx(0.81)
        assert top.reasons[0] == "Matches your interests: ai"
        assert "Recent content" in top.reasons
        assert "From popular author" in top.reasons
        assert "Popular among users" not in top.reasons

    def test_excludes_interacted_articles(self, scorer, make_user, make_article, interact):
        reader = make_user("reader", interests=["ai"])
        seen = make_article(title="Seen", tags=["ai"])
        unseen = make_article(title="Unseen", tags=["ai"])
        interact(reader, seen, "view")

        ids = [r.article.id for r in scorer.get_recommendations(reader.id)]

        assert seen.id not in ids
        assert unseen.id in ids

    def test_unknown_user(self, scorer):
        with pytest.raises(UserNotFound):
            scorer.get_recommendations(999)

    def test_no_candidates(self, scorer, make_user):
        reader = make_user("reader")
        assert scorer.get_recommendations(reader.id) == []

    def test_general_recommendation(self, scorer, make_user, make_article):
        """Test an old, unmatched, unpopular article by a new author."""
        now = datetime.utcnow()
        reader = make_user("reader")
        make_article(title="Archive", author="Nobody", created_at=now - timedelta(days=200))

        [recommendation] = scorer.get_recommendations(reader.id, now=now)

        assert recommendation.score == 0.09
        assert recommendation.reasons == ["General recommendation"]

    def test_sorted_and_limited(self, scorer, make_user, make_article):
        now = datetime.utcnow()
        reader = make_user("reader", interests=["space"])
        for day in range(6):
            make_article(
                title=f"Article {day}",
                author=f"Author {day}",
                tags=["space"] if day % 2 else [],
                created_at=now - timedelta(days=day * 20),
            )

        recommendations = scorer.get_recommendations(reader.id, limit=3, now=now)

        assert len(recommendations) == 3
        scores = [r.score for r in recommendations]
        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= s <= 1.0 for s in scores)

    def test_equal_scores_keep_newest_first(self, scorer, make_user, make_article):
        now = datetime.utcnow()
        reader = make_user("reader")
        first = make_article(title="First", author="Same", created_at=now - timedelta(days=200))
        second = make_article(title="Second", author="Same", created_at=now - timedelta(days=150))

        recommendations = scorer.get_recommendations(reader.id, now=now)

        assert [r.article.id for r in recommendations] == [second.id, first.id]
        assert recommendations[0].score == recommendations[1].score

    def test_limit_is_capped(self, db_session, make_user, make_article):
        config = RecommenderConfig(max_limit=2)
        scorer = RecommendationScorer(db_session, config=config)
        reader = make_user("reader")
        for i in range(5):
            make_article(title=f"Article {i}")

        assert len(scorer.get_recommendations(reader.id, limit=50)) == 2


class TestAuthorReputation:
    """Tests for author reputation lookups."""

    def test_excludes_the_scored_article(self, scorer, make_user, make_article, interact):
        fan = make_user("fan")
        only = make_article(title="Only one")
        interact(fan, only, "share", share_metadata={"platform": "email"})

        assert scorer.author_reputation(only) == 0.5

    def test_mean_of_other_articles(self, scorer, make_user, make_article, interact):
        fan = make_user("fan")
        scored = make_article(title="Scored")
        liked = make_article(title="Liked")
        make_article(title="Ignored")
        interact(fan, liked, "like")

        # (0.03 + 0.0) / 2
        assert scorer.author_reputation(scored) == pytest.approx(0.015)
