"""Tests for recommendation signals."""

from datetime import datetime, timedelta

import pytest

from news_curator.core.signals import (
    author_score,
    combine_scores,
    freshness_score,
    interest_score,
    matching_interests,
    popularity_score,
    weighted_engagement,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


class TestInterestScore:
    """Tests for interest matching."""

    def test_full_match(self):
        assert interest_score(["ai"], ["ai", "technology"]) == 1.0

    def test_partial_match(self):
        assert interest_score(["ai", "sports"], ["ai"]) == 0.5

    def test_substring_matches_both_ways(self):
        """Test that an interest inside a tag and a tag inside an interest both match."""
        assert matching_interests(["tech", "machine learning"], ["technology", "learning"]) == [
            "tech",
            "machine learning",
        ]

    def test_no_interests(self):
        assert interest_score([], ["ai"]) == 0.0

    def test_no_tags(self):
        assert interest_score(["ai"], []) == 0.0


class TestPopularityScore:
    """Tests for popularity."""

    def test_weighted_sum(self):
        counts = {"view": 1, "like": 1, "share": 1, "comment": 10}
        assert weighted_engagement(counts) == 49
        assert popularity_score(counts) == pytest.approx(0.49)

    def test_capped_at_one(self):
        assert popularity_score({"share": 100}) == 1.0

    def test_unknown_type_weighs_one(self):
        assert weighted_engagement({"bookmark": 3}) == 3

    def test_no_interactions(self):
        assert popularity_score({}) == 0.0


class TestFreshnessScore:
    """Tests for the freshness step function."""

    @pytest.mark.parametrize(
        "age, expected",
        [
            (timedelta(hours=1), 1.0),
            (timedelta(days=1), 1.0),
            (timedelta(days=2), 0.9),
            (timedelta(days=7), 0.9),
            (timedelta(days=8), 0.7),
            (timedelta(days=30), 0.7),
            (timedelta(days=31), 0.4),
            (timedelta(days=90), 0.4),
            (timedelta(days=91), 0.2),
            (timedelta(days=400), 0.2),
        ],
    )
    def test_steps(self, age: timedelta, expected: float):
        assert freshness_score(NOW - age, NOW) == expected

    def test_defaults_to_current_time(self):
        assert freshness_score(datetime.utcnow()) == 1.0


class TestAuthorScore:
    """Tests for author reputation."""

    def test_mean_of_popularities(self):
        assert author_score([0.2, 0.4, 0.9]) == pytest.approx(0.5)

    def test_neutral_without_history(self):
        assert author_score([]) == 0.5


class TestCombineScores:
    """Tests for the weighted combination."""

    def test_weights(self):
        assert combine_scores(1.0, 0.5, 0.9, 0.8) == pytest.approx(0.81)

    def test_general_article(self):
        assert combine_scores(0.0, 0.0, 0.2, 0.5) == pytest.approx(0.09)

    def test_never_exceeds_one(self):
        assert combine_scores(1.0, 1.0, 1.0, 1.0) <= 1.0
        assert combine_scores(2.0, 2.0, 2.0, 2.0) == 1.0
