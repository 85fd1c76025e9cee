"""
Remote summary providers.

Each provider turns article text into a single HTTP request and parses the
summary out of the JSON response. ``send`` never raises: failures are
returned on the ``ProviderResult`` so the orchestrator can log them and move
on to the next provider.
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from news_curator.config import ProviderSettings
from news_curator.core.summarizer import SummaryOptions
from news_curator.errors import (
    ProviderInvalidResponse,
    ProviderTimeout,
    ProviderTransportError,
    ProviderUnavailable,
    SummaryError,
)
from news_curator.logger import get_logger

logger = get_logger(__name__)

MIN_RESPONSE_CHARS = 10

OLLAMA_PROMPT = (
    "Please provide a concise summary of the following text in 2-3 sentences. "
    "Focus on the main points and key insights:\n\n{text}\n\nSummary:"
)
OPENAI_PROMPT = "Summarize the following text in 2-3 concise sentences:\n\n{text}"


@dataclass
class ProviderResult:
    """Outcome of one provider attempt."""

    provider: str
    model: str
    summary: Optional[str] = None
    error: Optional[SummaryError] = None

    @property
    def success(self) -> bool:
        return self.error is None and bool(self.summary)

    def __post_init__(self):
        """Validate provider result."""
        if self.summary is None and self.error is None:
            self.error = ProviderInvalidResponse("empty response", provider=self.provider)


def truncate_text(text: str, budget: int, ellipsis: bool = False) -> str:
    """Cut text to a character budget, optionally marking the cut."""
    if len(text) <= budget:
        return text
    return text[:budget] + ("..." if ellipsis else "")


class SummaryProvider:
    """Base class for HTTP summary providers.

    Subclasses define the endpoint, the request payload and how the summary is
    read back from the response.
    """

    name: str = ""
    models: tuple[str, ...] = ()

    def __init__(
        self,
        default_model: str,
        timeout_seconds: float,
        api_key: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            default_model: Model used when no valid override is requested
            timeout_seconds: Bound on the single request made per attempt
            api_key: Bearer credential, if the provider needs one
            client: Shared httpx client; a short-lived one is used otherwise
        """
        self.default_model = default_model
        self.timeout_seconds = timeout_seconds
        self.api_key = api_key
        self._client = client

    def is_configured(self) -> bool:
        """Whether credentials and endpoint are present."""
        return bool(self.api_key)

    def resolve_model(self, options: SummaryOptions) -> str:
        """Use the requested model only if this provider serves it."""
        if options.model and options.model in self.models:
            return options.model
        return self.default_model

    def endpoint(self, model: str) -> str:
        raise NotImplementedError

    def build_payload(self, text: str, options: SummaryOptions, model: str) -> dict[str, Any]:
        raise NotImplementedError

    def parse_response(self, data: Any) -> Optional[str]:
        raise NotImplementedError

    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def send(self, text: str, options: Optional[SummaryOptions] = None) -> ProviderResult:
        """Request a summary of text.

        Args:
            text: Source text
            options: Summary options

        Returns:
            ProviderResult carrying either the raw summary or the failure
        """
        options = options or SummaryOptions()
        model = self.resolve_model(options)

        if not self.is_configured():
            return self._failure(model, ProviderUnavailable("not configured", provider=self.name))

        try:
            response = self._post(self.endpoint(model), self.build_payload(text, options, model))
            response.raise_for_status()
            summary = self.parse_response(response.json())
        except httpx.TimeoutException:
            return self._failure(
                model,
                ProviderTimeout(f"no response within {self.timeout_seconds}s", provider=self.name),
            )
        except httpx.HTTPStatusError as e:
            return self._failure(
                model,
                ProviderTransportError(f"HTTP {e.response.status_code}", provider=self.name),
            )
        except httpx.HTTPError as e:
            return self._failure(model, ProviderTransportError(str(e), provider=self.name))
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            return self._failure(
                model, ProviderInvalidResponse(f"malformed payload: {e}", provider=self.name)
            )
        except Exception as e:
            logger.opt(exception=e).warning(f"{self.name} failed unexpectedly: {e}")
            return self._failure(model, ProviderTransportError(f"unexpected error: {e}", provider=self.name))

        summary = summary.strip() if isinstance(summary, str) else ""
        if len(summary) < MIN_RESPONSE_CHARS:
            return self._failure(
                model, ProviderInvalidResponse("empty or too short response", provider=self.name)
            )

        logger.debug(f"{self.name} returned {len(summary)} chars using {model}")
        return ProviderResult(provider=self.name, model=model, summary=summary)

    def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(
                url, json=payload, headers=self.headers(), timeout=self.timeout_seconds
            )
        with httpx.Client(timeout=self.timeout_seconds) as client:
            return client.post(url, json=payload, headers=self.headers())

    def _failure(self, model: str, error: SummaryError) -> ProviderResult:
        return ProviderResult(provider=self.name, model=model, error=error)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(model='{self.default_model}')>"


class OllamaProvider(SummaryProvider):
    """Local model served by Ollama."""

    name = "ollama"
    models = ("llama2", "llama2:13b", "mistral", "codellama", "phi")
    text_budget = 2000

    def __init__(self, base_url: Optional[str], **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url.rstrip("/") if base_url else None

    def is_configured(self) -> bool:
        return bool(self.base_url)

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/api/generate"

    def build_payload(self, text: str, options: SummaryOptions, model: str) -> dict[str, Any]:
        prompt = OLLAMA_PROMPT.format(text=truncate_text(text, self.text_budget, ellipsis=True))
        return {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": options.temperature,
                "top_p": 0.9,
                "num_predict": options.max_length,
            },
        }

    def parse_response(self, data: Any) -> Optional[str]:
        return data.get("response")


class CohereProvider(SummaryProvider):
    """Cohere summarize endpoint."""

    name = "cohere"
    models = ("command", "command-light")
    url = "https://api.cohere.ai/v1/summarize"
    text_budget = 100000

    def endpoint(self, model: str) -> str:
        return self.url

    @staticmethod
    def length_bucket(max_length: int) -> str:
        if max_length < 100:
            return "short"
        if max_length < 200:
            return "medium"
        return "long"

    def build_payload(self, text: str, options: SummaryOptions, model: str) -> dict[str, Any]:
        return {
            "text": truncate_text(text, self.text_budget),
            "length": self.length_bucket(options.max_length),
            "format": "paragraph",
            "model": model,
            "extractiveness": "low",
            "temperature": options.temperature,
        }

    def parse_response(self, data: Any) -> Optional[str]:
        return data.get("summary")


class HuggingFaceProvider(SummaryProvider):
    """HuggingFace hosted inference for summarization models."""

    name = "huggingface"
    # model -> (max_length, min_length)
    model_limits = {
        "sshleifer/distilbart-cnn-12-6": (1024, 30),
        "t5-small": (512, 20),
        "facebook/bart-large-cnn": (1024, 30),
    }
    models = tuple(model_limits)
    text_budget = 3000

    def endpoint(self, model: str) -> str:
        return f"https://api-inference.huggingface.co/models/{model}"

    def build_payload(self, text: str, options: SummaryOptions, model: str) -> dict[str, Any]:
        max_length, min_length = self.model_limits.get(model, (512, 20))
        return {
            "inputs": truncate_text(text, self.text_budget, ellipsis=True),
            "parameters": {
                "max_length": min(max_length, 200),
                "min_length": min(min_length, 30),
                "do_sample": False,
                "early_stopping": True,
            },
        }

    def parse_response(self, data: Any) -> Optional[str]:
        return data[0].get("summary_text")


class OpenAIProvider(SummaryProvider):
    """OpenAI chat completions."""

    name = "openai"
    models = ("gpt-3.5-turbo", "gpt-4o-mini")
    url = "https://api.openai.com/v1/chat/completions"
    text_budget = 3000

    def endpoint(self, model: str) -> str:
        return self.url

    def build_payload(self, text: str, options: SummaryOptions, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [
                {
                    "role": "user",
                    "content": OPENAI_PROMPT.format(text=truncate_text(text, self.text_budget)),
                }
            ],
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
        }

    def parse_response(self, data: Any) -> Optional[str]:
        return data["choices"][0]["message"]["content"]


def build_providers(
    settings: ProviderSettings, client: Optional[httpx.Client] = None
) -> list[SummaryProvider]:
    """Build the provider chain in preference order.

    Args:
        settings: Immutable provider configuration
        client: Optional shared httpx client

    Returns:
        Providers ordered local model first, then hosted services
    """
    return [
        OllamaProvider(
            base_url=settings.ollama_base_url,
            default_model=settings.ollama_model,
            timeout_seconds=settings.ollama_timeout_seconds,
            client=client,
        ),
        CohereProvider(
            default_model=settings.cohere_model,
            timeout_seconds=settings.cohere_timeout_seconds,
            api_key=settings.cohere_api_key,
            client=client,
        ),
        HuggingFaceProvider(
            default_model=settings.huggingface_model,
            timeout_seconds=settings.huggingface_timeout_seconds,
            api_key=settings.huggingface_api_key,
            client=client,
        ),
        OpenAIProvider(
            default_model=settings.openai_model,
            timeout_seconds=settings.openai_timeout_seconds,
            api_key=settings.openai_api_key,
            client=client,
        ),
    ]
