"""
News Curator - article summarization and recommendation engine.

This package provides extractive and provider-backed article summarization,
per-user article recommendations, and time-windowed trending rankings on top
of an article/user/interaction store.
"""

__version__ = "0.1.0"
