"""
Facade for summary generation.

Provides unified interface for extractive summaries, the provider fallback
chain, and provider status checks.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import httpx

from news_curator.config import ProviderSettings
from news_curator.logger import get_logger

if TYPE_CHECKING:
    from news_curator.core.orchestrator import BestSummary, ProviderStatus
    from news_curator.core.providers import SummaryProvider
    from news_curator.core.summarizer import SummaryOptions

USER_PROVIDED = "user-provided"


@dataclass
class ArticleSummary:
    """Summary attached to an article and whether it was generated."""

    summary: str
    generated: bool
    provider: str
    model: str
    method: str

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "generated": self.generated,
            "provider": self.provider,
            "model": self.model,
            "method": self.method,
        }


class SummaryService:
    """Facade for summary generation.

    Provides unified interface for extractive summaries, the provider
    fallback chain, and provider status checks.
    """

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        providers: Optional[list["SummaryProvider"]] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize summary service.

        Args:
            settings: Provider settings (from config if omitted)
            providers: Explicit provider chain
            client: Shared httpx client for provider calls
        """
        from news_curator.core.factories import create_extractive_summarizer, create_orchestrator

        self._extractor = create_extractive_summarizer()
        self._orchestrator = create_orchestrator(settings=settings, providers=providers, client=client)
        self._logger = get_logger(__name__)

    def _options(self, options: Optional["SummaryOptions"]) -> "SummaryOptions":
        from news_curator.core.factories import create_summary_options

        return options or create_summary_options()

    def generate_summary(self, text: str, options: Optional["SummaryOptions"] = None) -> str:
        """Generate an extractive summary.

        Args:
            text: Input text
            options: Summary options; only ``max_sentences`` is used

        Returns:
            Summary string, empty when no sentence qualifies
        """
        return self._extractor.generate_summary(text, self._options(options))

    def generate_best_summary(
        self, text: str, options: Optional["SummaryOptions"] = None
    ) -> "BestSummary":
        """Generate a summary through the provider chain.

        Args:
            text: Input text
            options: Summary options

        Returns:
            BestSummary with provider, model and method
        """
        return self._orchestrator.generate_best_summary(text, self._options(options))

    def generate_summary_for_article(
        self, content: str, existing_summary: Optional[str] = None
    ) -> ArticleSummary:
        """Summary for a new article, keeping one the author supplied.

        Args:
            content: Article body
            existing_summary: Summary provided with the article

        Returns:
            ArticleSummary; ``generated`` is False for a supplied summary
        """
        if existing_summary and existing_summary.strip():
            return ArticleSummary(
                summary=existing_summary.strip(),
                generated=False,
                provider=USER_PROVIDED,
                model="none",
                method="extractive",
            )

        best = self.generate_best_summary(content)
        self._logger.debug(f"Generated article summary via {best.provider}")
        return ArticleSummary(
            summary=best.summary,
            generated=True,
            provider=best.provider,
            model=best.model,
            method=best.method,
        )

    def check_providers(self) -> dict[str, "ProviderStatus"]:
        """Check every provider and report availability."""
        return self._orchestrator.check_providers()


def create_summary_service(
    settings: Optional[ProviderSettings] = None,
    providers: Optional[list["SummaryProvider"]] = None,
    client: Optional[httpx.Client] = None,
) -> SummaryService:
    """Create a SummaryService instance.

    Args:
        settings: Provider settings
        providers: Explicit provider chain
        client: Shared httpx client

    Returns:
        Configured SummaryService
    """
    return SummaryService(settings=settings, providers=providers, client=client)
