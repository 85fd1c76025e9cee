"""
Term statistics for sentence scoring.

Sentences are tokenized with NLTK's regexp tokenizer and reduced with the
Porter stemmer; short stems and stems in the stopword list are dropped. The
resulting term lists feed a TF-IDF index in which every sentence is its own
document, so IDF measures how specific a term is within one article rather
than across a corpus of articles.
"""

import math
from collections import Counter
from typing import Iterable

from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer

STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "must",
    "can", "this", "that", "these", "those", "i", "me", "my", "you", "your", "he",
    "him", "his", "she", "her", "it", "its", "we", "us", "our", "they", "them", "their",
})

MIN_TERM_LENGTH = 3

_tokenizer = RegexpTokenizer(r"[A-Za-z0-9_]+")
_stemmer = PorterStemmer()


def extract_terms(sentence: str) -> list[str]:
    """Turn a sentence into its list of stemmed terms.

    Stopwords are matched against the stem, not the raw token, so "this"
    survives as "thi". Duplicates are kept; a term's frequency within the
    sentence matters.
    """
    terms = []
    for token in _tokenizer.tokenize(sentence.lower()):
        stem = _stemmer.stem(token)
        if len(stem) >= MIN_TERM_LENGTH and stem not in STOPWORDS:
            terms.append(stem)
    return terms


class TermStatisticsIndex:
    """TF-IDF statistics over a small corpus of term lists.

    ``tf`` is the raw count of a term in a document and
    ``idf = 1 + ln(N / (1 + df))`` where ``df`` is the number of documents
    containing the term.
    """

    def __init__(self, documents: Iterable[list[str]]) -> None:
        self._documents = [list(doc) for doc in documents]
        self._counts = [Counter(doc) for doc in self._documents]
        self._document_frequency: Counter = Counter()
        for counts in self._counts:
            self._document_frequency.update(counts.keys())

    @classmethod
    def from_sentences(cls, sentences: Iterable[str]) -> "TermStatisticsIndex":
        """Build an index treating each sentence as a document."""
        return cls(extract_terms(sentence) for sentence in sentences)

    def __len__(self) -> int:
        return len(self._documents)

    def terms(self, index: int) -> list[str]:
        """Term list of a document."""
        return self._documents[index]

    def tf(self, term: str, index: int) -> int:
        """Raw frequency of a term in a document."""
        return self._counts[index].get(term, 0)

    def df(self, term: str) -> int:
        """Number of documents containing a term."""
        return self._document_frequency.get(term, 0)

    def idf(self, term: str) -> float:
        """Inverse document frequency of a term."""
        return 1.0 + math.log(len(self._documents) / (1 + self.df(term)))

    def tfidf(self, term: str, index: int) -> float:
        """TF-IDF weight of a term in a document."""
        return self.tf(term, index) * self.idf(term)

    def document_score(self, index: int) -> float:
        """Sum of TF-IDF over every term occurrence in a document."""
        return sum(self.tfidf(term, index) for term in self._documents[index])
