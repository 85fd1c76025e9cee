"""
Signals combined into a recommendation score.

Every signal is a float in [0, 1]. The functions here are pure; the
recommender is responsible for loading the data they need.
"""

from datetime import datetime
from typing import Iterable, Mapping, Optional

INTERACTION_WEIGHTS = {
    "view": 1,
    "like": 3,
    "share": 5,
    "comment": 4,
}
POPULARITY_SCALE = 100.0

# (max age in days, score), checked in order
FRESHNESS_STEPS = (
    (1, 1.0),
    (7, 0.9),
    (30, 0.7),
    (90, 0.4),
)
STALE_SCORE = 0.2

NEUTRAL_AUTHOR_SCORE = 0.5

SIGNAL_WEIGHTS = {
    "interest": 0.4,
    "popularity": 0.3,
    "freshness": 0.2,
    "author": 0.1,
}


def _matches(interest: str, tag: str) -> bool:
    return interest in tag or tag in interest


def matching_interests(interests: Iterable[str], tags: Iterable[str]) -> list[str]:
    """Interests that substring-match any tag, in either direction."""
    tags = list(tags)
    return [interest for interest in interests if any(_matches(interest, tag) for tag in tags)]


def interest_score(interests: list[str], tags: list[str]) -> float:
    """Share of the user's interests that match the article's tags."""
    if not interests or not tags:
        return 0.0
    return len(matching_interests(interests, tags)) / len(interests)


def weighted_engagement(counts: Mapping[str, int]) -> int:
    """Weighted sum of interaction counts keyed by interaction type.

    Unknown types count with weight 1.
    """
    return sum(count * INTERACTION_WEIGHTS.get(kind, 1) for kind, count in counts.items())


def popularity_score(counts: Mapping[str, int]) -> float:
    """Popularity from an article's all-time interaction counts."""
    return min(1.0, weighted_engagement(counts) / POPULARITY_SCALE)


def freshness_score(created_at: datetime, now: Optional[datetime] = None) -> float:
    """Step function of article age."""
    now = now or datetime.utcnow()
    age_days = (now - created_at).total_seconds() / 86400
    for max_days, score in FRESHNESS_STEPS:
        if age_days <= max_days:
            return score
    return STALE_SCORE


def author_score(popularities: list[float]) -> float:
    """Mean popularity of an author's other articles, neutral when none exist."""
    if not popularities:
        return NEUTRAL_AUTHOR_SCORE
    return sum(popularities) / len(popularities)


def combine_scores(interest: float, popularity: float, freshness: float, author: float) -> float:
    """Weighted combination of signals, capped at 1."""
    score = (
        interest * SIGNAL_WEIGHTS["interest"]
        + popularity * SIGNAL_WEIGHTS["popularity"]
        + freshness * SIGNAL_WEIGHTS["freshness"]
        + author * SIGNAL_WEIGHTS["author"]
    )
    return min(score, 1.0)
