"""
Extractive summarizer for article bodies.

Sentences are scored with TF-IDF computed over the sentences of the same
document, normalized for length, and given a small bonus for leading
position. The highest-scoring sentences are returned in document order.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from news_curator.core.text_stats import TermStatisticsIndex
from news_curator.logger import get_logger

logger = get_logger(__name__)

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")

LONG_SENTENCE_TERMS = 30
LONG_SENTENCE_PENALTY = 0.9
POSITION_BONUS = {0: 0.15, 1: 0.05}


class SummaryOptions(BaseModel):
    """Options accepted by summary generation.

    Each option only affects the steps that use it: ``max_sentences`` the
    extractive summarizer, the rest the remote providers.
    """

    max_sentences: int = Field(default=3, ge=1, le=20)
    max_tokens: int = Field(default=150, ge=10, le=4096)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    model: Optional[str] = Field(default=None, description="Preferred provider model")
    max_length: int = Field(default=150, ge=10, le=1000)


@dataclass
class ScoredSentence:
    """A candidate sentence with its score and original position."""

    index: int
    sentence: str
    score: float

    def __repr__(self) -> str:
        return f"<ScoredSentence(index={self.index}, score={self.score:.4f})>"


class ExtractiveSummarizer:
    """Extractive summarization using per-sentence TF-IDF scoring."""

    def __init__(
        self,
        max_sentences: int = 3,
        min_sentence_chars: int = 15,
        min_sentence_words: int = 4,
    ) -> None:
        """Initialize the extractive summarizer.

        Args:
            max_sentences: Default number of sentences in a summary
            min_sentence_chars: Sentences shorter than this are noise
            min_sentence_words: Sentences with fewer words are noise
        """
        self.max_sentences = max_sentences
        self.min_sentence_chars = min_sentence_chars
        self.min_sentence_words = min_sentence_words

    def split_sentences(self, text: str) -> list[str]:
        """Split text into sentences and drop noise fragments.

        Args:
            text: Input text

        Returns:
            Trimmed sentences in document order, without terminal punctuation
        """
        sentences = []
        for candidate in SENTENCE_BOUNDARY.split(text or ""):
            candidate = candidate.strip()
            if len(candidate) < self.min_sentence_chars:
                continue
            if len(candidate.split()) < self.min_sentence_words:
                continue
            sentences.append(candidate)
        return sentences

    def score_sentences(self, sentences: list[str]) -> list[ScoredSentence]:
        """Score every sentence against the other sentences of the document.

        Args:
            sentences: Filtered sentences in document order

        Returns:
            One ScoredSentence per input, in input order
        """
        index = TermStatisticsIndex.from_sentences(sentences)

        scored = []
        for position, sentence in enumerate(sentences):
            terms = index.terms(position)
            if not terms:
                scored.append(ScoredSentence(position, sentence, 0.0))
                continue

            score = index.document_score(position) / math.sqrt(len(terms))
            if len(terms) > LONG_SENTENCE_TERMS:
                score *= LONG_SENTENCE_PENALTY
            score += POSITION_BONUS.get(position, 0.0)

            scored.append(ScoredSentence(position, sentence, score))
        return scored

    def select_sentences(self, text: str, max_sentences: Optional[int] = None) -> list[str]:
        """Pick the summary sentences for a document, in document order."""
        limit = max_sentences or self.max_sentences
        sentences = self.split_sentences(text)

        if len(sentences) <= limit:
            return sentences

        scored = self.score_sentences(sentences)
        # Highest score first; equal scores keep the earlier sentence
        ranked = sorted(scored, key=lambda item: (-item.score, item.index))
        selected = sorted(ranked[:limit], key=lambda item: item.index)
        return [item.sentence for item in selected]

    def generate_summary(self, text: str, options: Optional[SummaryOptions] = None) -> str:
        """Generate an extractive summary.

        Args:
            text: Input text
            options: Summary options; only ``max_sentences`` is used

        Returns:
            Selected sentences joined by a single space, or an empty string
            when the text has no qualifying sentences
        """
        max_sentences = options.max_sentences if options else self.max_sentences
        selected = self.select_sentences(text, max_sentences)

        if not selected:
            logger.debug("No qualifying sentences, returning empty summary")
        return " ".join(selected)
