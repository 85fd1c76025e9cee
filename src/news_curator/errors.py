"""
Exception types for News Curator.

Summary errors describe why a single provider attempt did not produce a
usable summary. They are carried as values on ``ProviderResult`` and logged by
the orchestrator; they are never raised out of summary generation.
"""

from typing import Optional


class CuratorError(Exception):
    """Base class for all News Curator errors."""


class SummaryError(CuratorError):
    """A summary attempt failed."""

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        self.provider = provider
        prefix = f"{provider}: " if provider else ""
        super().__init__(f"{prefix}{message}")


class ProviderUnavailable(SummaryError):
    """Provider credentials or endpoint are not configured."""


class ProviderTimeout(SummaryError):
    """Provider call exceeded its timeout."""


class ProviderTransportError(SummaryError):
    """Provider returned a non-2xx response or the connection failed."""


class ProviderInvalidResponse(SummaryError):
    """Provider payload was malformed, empty, or too short."""


class ValidationRejected(SummaryError):
    """Candidate summary failed the quality gate."""


class ExhaustedProviders(SummaryError):
    """Every provider in the chain failed."""

    def __init__(self, failures: list[SummaryError]) -> None:
        self.failures = failures
        super().__init__(f"all {len(failures)} providers failed")


class UserNotFound(CuratorError):
    """Requested user does not exist."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class DuplicateInteraction(CuratorError):
    """A non-comment interaction already exists for (user, article, type)."""

    def __init__(self, user_id: int, article_id: int, interaction_type: str) -> None:
        self.user_id = user_id
        self.article_id = article_id
        self.interaction_type = interaction_type
        super().__init__(
            f"User {user_id} already has a {interaction_type} on article {article_id}"
        )


class InvalidInteraction(CuratorError):
    """Operation is not allowed for this interaction type."""
