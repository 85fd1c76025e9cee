"""
Provider fallback chain for summary generation.

Providers are tried one at a time in preference order. The first candidate
that survives cleaning and validation wins; if none does, the extractive
summarizer produces the result, so summary generation always succeeds.
"""

from dataclasses import dataclass, field
from typing import Optional

import httpx

from news_curator.config import ProviderSettings
from news_curator.core.providers import ProviderResult, SummaryProvider, build_providers
from news_curator.core.summarizer import ExtractiveSummarizer, SummaryOptions
from news_curator.core.validation import SummaryValidator, clean_summary
from news_curator.errors import (
    ExhaustedProviders,
    ProviderTransportError,
    SummaryError,
    ValidationRejected,
)
from news_curator.logger import get_logger

logger = get_logger(__name__)

EXTRACTIVE_PROVIDER = "extractive"
EXTRACTIVE_MODEL = "tf-idf"

STATUS_CHECK_TEXT = (
    "Artificial intelligence is transforming how we work and live. Machine learning "
    "algorithms can now perform complex tasks that once required human intelligence. "
    "This technology has applications in healthcare, finance, and many other industries."
)


@dataclass
class BestSummary:
    """Summary text together with where it came from."""

    summary: str
    provider: str
    model: str
    method: str  # "ai" or "extractive"

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "provider": self.provider,
            "model": self.model,
            "method": self.method,
        }


@dataclass
class ProviderStatus:
    """Availability of one provider as seen by a status request."""

    available: bool
    model: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict = {"available": self.available}
        if self.model:
            data["model"] = self.model
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ChainState:
    """Failures collected while walking the provider chain."""

    failures: list[SummaryError] = field(default_factory=list)

    def record(self, error: SummaryError) -> None:
        self.failures.append(error)
        logger.warning(f"Summary attempt failed, trying next provider: {error}")


class ProviderFallbackOrchestrator:
    """Runs the provider chain with an extractive fallback."""

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        providers: Optional[list[SummaryProvider]] = None,
        extractor: Optional[ExtractiveSummarizer] = None,
        validator: Optional[SummaryValidator] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Provider credentials and endpoints, fixed for the
                lifetime of the orchestrator
            providers: Explicit provider chain; built from settings otherwise
            extractor: Extractive summarizer used as the final step
            validator: Quality gate for provider output
            client: Shared httpx client handed to the providers
        """
        self.settings = settings or ProviderSettings()
        self.providers = (
            providers if providers is not None else build_providers(self.settings, client)
        )
        self.extractor = extractor or ExtractiveSummarizer()
        self.validator = validator or SummaryValidator()

    def _send(self, provider: SummaryProvider, text: str, options: SummaryOptions) -> ProviderResult:
        try:
            return provider.send(text, options)
        except Exception as e:
            # Injected providers may raise from send
            logger.opt(exception=e).warning(f"{provider.name} raised instead of returning a result")
            return ProviderResult(
                provider=provider.name,
                model=getattr(provider, "default_model", ""),
                error=ProviderTransportError(f"unexpected error: {e}", provider=provider.name),
            )

    def _attempt(self, provider: SummaryProvider, text: str, options: SummaryOptions) -> ProviderResult:
        """Run one provider and pass its output through the quality gate."""
        result = self._send(provider, text, options)
        if not result.success:
            return result

        summary = clean_summary(result.summary or "")
        reason = self.validator.rejection_reason(summary, text)
        if reason:
            return ProviderResult(
                provider=result.provider,
                model=result.model,
                error=ValidationRejected(reason, provider=result.provider),
            )
        return ProviderResult(provider=result.provider, model=result.model, summary=summary)

    def _run_chain(self, text: str, options: SummaryOptions) -> ProviderResult:
        """Return the first accepted provider result.

        Raises:
            ExhaustedProviders: If no provider produced an accepted summary
        """
        state = ChainState()
        for provider in self.providers:
            result = self._attempt(provider, text, options)
            if result.success:
                return result
            state.record(result.error)
        raise ExhaustedProviders(state.failures)

    def _extract(self, text: str, options: SummaryOptions) -> str:
        # Empty when no sentence qualifies
        return self.extractor.generate_summary(text, options)

    def generate_best_summary(
        self, text: str, options: Optional[SummaryOptions] = None
    ) -> BestSummary:
        """Generate the best available summary for text.

        Args:
            text: Source text
            options: Summary options

        Returns:
            BestSummary with method "ai" when a provider was accepted,
            otherwise the extractive result
        """
        options = options or SummaryOptions()

        try:
            result = self._run_chain(text, options)
        except ExhaustedProviders as e:
            logger.info(f"Using extractive summary after {len(e.failures)} provider failures")
            return BestSummary(
                summary=self._extract(text, options),
                provider=EXTRACTIVE_PROVIDER,
                model=EXTRACTIVE_MODEL,
                method="extractive",
            )

        logger.info(f"Summary generated by {result.provider} ({result.model})")
        return BestSummary(
            summary=result.summary or "",
            provider=result.provider,
            model=result.model,
            method="ai",
        )

    def generate_summary(self, text: str, options: Optional[SummaryOptions] = None) -> str:
        """Generate summary text only."""
        return self.generate_best_summary(text, options).summary

    def check_providers(self) -> dict[str, ProviderStatus]:
        """Send a short sample text to every provider.

        Returns:
            Mapping of provider name to its status; the extractive summarizer
            is always reported as available
        """
        statuses: dict[str, ProviderStatus] = {}
        options = SummaryOptions()
        for provider in self.providers:
            result = self._send(provider, STATUS_CHECK_TEXT, options)
            if result.success:
                statuses[provider.name] = ProviderStatus(available=True, model=result.model)
            else:
                statuses[provider.name] = ProviderStatus(available=False, error=str(result.error))

        statuses[EXTRACTIVE_PROVIDER] = ProviderStatus(available=True, model=EXTRACTIVE_MODEL)
        return statuses
