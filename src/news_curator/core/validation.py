"""
Cleaning and quality gate for provider-generated summaries.
"""

import re
from typing import Optional

LEADING_BRACKET = re.compile(r"^\[.*?\]\s*")
LEADING_LABEL = re.compile(r"^summary:?\s*", re.IGNORECASE)
WHITESPACE = re.compile(r"\s+")
EDGE_QUOTES = re.compile(r"^[\"']|[\"']$")

MIN_SUMMARY_CHARS = 20
MIN_SUMMARY_WORDS = 10
MAX_SOURCE_RATIO = 0.8
FAILURE_MARKERS = ("error", "failed")
UNDEFINED_MARKER = "undefined"


def clean_summary(summary: str) -> str:
    """Normalize a raw provider summary.

    Strips a leading bracketed tag and a leading "Summary"/"Summary:" label,
    collapses whitespace, and removes one quote at either end.
    """
    summary = LEADING_BRACKET.sub("", summary)
    summary = LEADING_LABEL.sub("", summary)
    summary = WHITESPACE.sub(" ", summary).strip()
    summary = EDGE_QUOTES.sub("", summary)
    return summary.strip()


class SummaryValidator:
    """Decides whether a candidate summary is good enough to return."""

    def __init__(
        self,
        min_chars: int = MIN_SUMMARY_CHARS,
        min_words: int = MIN_SUMMARY_WORDS,
        max_source_ratio: float = MAX_SOURCE_RATIO,
    ) -> None:
        self.min_chars = min_chars
        self.min_words = min_words
        self.max_source_ratio = max_source_ratio

    def rejection_reason(self, summary: str, source: str) -> Optional[str]:
        """Return why a summary is rejected, or None if it is acceptable.

        Args:
            summary: Cleaned candidate summary
            source: Text the summary was generated from

        Returns:
            Human-readable rejection reason or None
        """
        if not summary or len(summary) < self.min_chars:
            return f"summary shorter than {self.min_chars} characters"

        if len(summary) >= len(source) * self.max_source_ratio:
            return "summary is not shorter than the source text"

        if len(summary.split(" ")) < self.min_words:
            return f"summary has fewer than {self.min_words} words"

        lowered = summary.lower()
        for marker in FAILURE_MARKERS:
            if marker in lowered:
                return f"summary contains failure marker {marker!r}"

        if UNDEFINED_MARKER in summary:
            return "summary contains 'undefined'"

        return None

    def is_valid(self, summary: str, source: str) -> bool:
        """Check whether a summary passes every rule."""
        return self.rejection_reason(summary, source) is None
