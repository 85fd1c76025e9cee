"""Tests for trending aggregation."""

from datetime import datetime, timedelta

import pytest

from news_curator.core.trending import EngagementStats, TrendingAggregator, rank_engagement


@pytest.fixture
def aggregator(db_session) -> TrendingAggregator:
    return TrendingAggregator(db_session)


class TestRankEngagement:
    """Tests for rank_engagement."""

    def test_engagement_then_total_then_id(self):
        grouped = {
            3: {"like": 1},
            1: {"view": 3},
            2: {"view": 1, "view_extra": 2},
            4: {"share": 1},
        }
        ranked = [s.article_id for s in rank_engagement(grouped)]
        # 4 has engagement 5; 1 and 2 tie at 3 with 3 interactions; 3 has 1 interaction
        assert ranked == [4, 1, 2, 3]

    def test_stats_dict(self):
        stats = EngagementStats(7, {"view": 2, "like": 1, "comment": 1})
        assert stats.to_dict() == {
            "views": 2,
            "likes": 1,
            "shares": 0,
            "comments": 1,
            "total_interactions": 4,
            "engagement_score": 9,
        }


class TestTrendingAggregator:
    """Tests for TrendingAggregator.get_trending_articles."""

    def test_likes_outrank_single_share(self, aggregator, make_user, make_article, interact):
        alice, bob = make_user("alice"), make_user("bob")
        shared = make_article(title="Shared")
        liked = make_article(title="Liked")
        interact(alice, shared, "share", share_metadata={"platform": "twitter"})
        interact(alice, liked, "like")
        interact(bob, liked, "like")

        trending = aggregator.get_trending_articles()

        assert [t.article.id for t in trending] == [liked.id, shared.id]
        assert trending[0].stats.engagement == 6
        assert trending[1].stats.engagement == 5

    def test_views_outrank_share(self, aggregator, make_user, make_article, interact):
        users = [make_user(f"user{i}") for i in range(5)]
        viewed = make_article(title="Viewed")
        shared = make_article(title="Shared")
        for user in users:
            interact(user, viewed, "view")
        interact(users[0], shared, "share", share_metadata={"platform": "email"})

        trending = aggregator.get_trending_articles()

        assert [t.article.id for t in trending] == [viewed.id, shared.id]
        assert trending[0].stats.to_dict()["views"] == 5

    def test_old_interactions_excluded(self, db_session, aggregator, make_user, make_article, interact):
        reader = make_user("reader")
        old = make_article(title="Old")
        recent = make_article(title="Recent")

        stale = interact(reader, old, "share", share_metadata={"platform": "twitter"})
        stale.created_at = datetime.utcnow() - timedelta(hours=48)
        db_session.flush()
        interact(reader, recent, "view")

        trending = aggregator.get_trending_articles(window_hours=24)

        assert [t.article.id for t in trending] == [recent.id]

    def test_wider_window_includes_older(self, db_session, aggregator, make_user, make_article, interact):
        reader = make_user("reader")
        old = make_article(title="Old")
        stale = interact(reader, old, "view")
        stale.created_at = datetime.utcnow() - timedelta(hours=48)
        db_session.flush()

        trending = aggregator.get_trending_articles(window_hours=72)

        assert [t.article.id for t in trending] == [old.id]

    def test_limit(self, aggregator, make_user, make_article, interact):
        reader = make_user("reader")
        for i in range(4):
            interact(reader, make_article(title=f"Article {i}"), "view")

        assert len(aggregator.get_trending_articles(limit=2)) == 2

    def test_no_interactions(self, aggregator, make_article):
        make_article()
        assert aggregator.get_trending_articles() == []
