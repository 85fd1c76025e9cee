"""Tests for HTTP summary providers using httpx.MockTransport."""

import json

import httpx
import pytest

from news_curator.config import ProviderSettings
from news_curator.core.providers import (
    CohereProvider,
    HuggingFaceProvider,
    OllamaProvider,
    OpenAIProvider,
    ProviderResult,
    build_providers,
    truncate_text,
)
from news_curator.core.summarizer import SummaryOptions
from news_curator.errors import (
    ProviderInvalidResponse,
    ProviderTimeout,
    ProviderTransportError,
    ProviderUnavailable,
)

SUMMARY_TEXT = "  Newsrooms use machine learning to sort stories while editors keep control.  "


def mock_client(handler) -> httpx.Client:
    """Create an httpx client whose requests are answered by handler."""
    return httpx.Client(transport=httpx.MockTransport(handler))


class Recorder:
    """Handler that records requests and returns a fixed response."""

    def __init__(self, status: int = 200, payload=None, text: str = None):
        self.status = status
        self.payload = payload
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        return httpx.Response(self.status, json=self.payload)

    @property
    def body(self) -> dict:
        return json.loads(self.requests[-1].content)


def ollama(handler, **kwargs) -> OllamaProvider:
    return OllamaProvider(
        base_url=kwargs.pop("base_url", "http://ollama.test"),
        default_model="llama2",
        timeout_seconds=60,
        client=mock_client(handler),
        **kwargs,
    )


class TestTruncateText:
    """Tests for truncate_text."""

    def test_short_text_unchanged(self):
        assert truncate_text("abc", 5) == "abc"

    def test_cut_without_marker(self):
        assert truncate_text("abcdef", 3) == "abc"

    def test_cut_with_marker(self):
        assert truncate_text("abcdef", 3, ellipsis=True) == "abc..."


class TestProviderResult:
    """Tests for ProviderResult."""

    def test_success(self):
        result = ProviderResult(provider="x", model="m", summary="text")
        assert result.success

    def test_missing_summary_is_failure(self):
        result = ProviderResult(provider="x", model="m")
        assert not result.success
        assert isinstance(result.error, ProviderInvalidResponse)


class TestOllamaProvider:
    """Tests for the local model provider."""

    def test_success(self):
        """Test a successful generate call."""
        handler = Recorder(payload={"response": SUMMARY_TEXT})
        result = ollama(handler).send("Some article text.", SummaryOptions())

        assert result.success
        assert result.summary == SUMMARY_TEXT.strip()
        assert result.provider == "ollama"
        assert result.model == "llama2"

        request = handler.requests[0]
        assert request.url == "http://ollama.test/api/generate"
        body = handler.body
        assert body["stream"] is False
        assert body["options"]["temperature"] == 0.3
        assert body["options"]["top_p"] == 0.9
        assert body["options"]["num_predict"] == 150
        assert "Some article text." in body["prompt"]
        assert body["prompt"].endswith("Summary:")

    def test_long_text_is_truncated(self):
        """Test that the prompt carries at most 2000 characters of text."""
        handler = Recorder(payload={"response": SUMMARY_TEXT})
        ollama(handler).send("x" * 5000)

        prompt = handler.body["prompt"]
        assert "x" * 2000 + "..." in prompt
        assert "x" * 2001 not in prompt

    def test_catalog_model_override(self):
        """Test that a model in the catalog replaces the default."""
        handler = Recorder(payload={"response": SUMMARY_TEXT})
        result = ollama(handler).send("text", SummaryOptions(model="mistral"))

        assert handler.body["model"] == "mistral"
        assert result.model == "mistral"

    def test_unknown_model_ignored(self):
        """Test that a model outside the catalog is ignored."""
        handler = Recorder(payload={"response": SUMMARY_TEXT})
        result = ollama(handler).send("text", SummaryOptions(model="gpt-4o-mini"))

        assert handler.body["model"] == "llama2"
        assert result.model == "llama2"

    def test_unconfigured_is_unavailable(self):
        """Test that a missing base URL skips the call."""
        handler = Recorder(payload={"response": SUMMARY_TEXT})
        result = ollama(handler, base_url=None).send("text")

        assert not result.success
        assert isinstance(result.error, ProviderUnavailable)
        assert handler.requests == []

    def test_http_error(self):
        """Test that non-2xx responses are transport errors."""
        result = ollama(Recorder(status=500, payload={"error": "boom"})).send("text")

        assert isinstance(result.error, ProviderTransportError)
        assert "500" in str(result.error)

    def test_timeout(self):
        """Test that timeouts become ProviderTimeout."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        result = ollama(handler).send("text")
        assert isinstance(result.error, ProviderTimeout)

    def test_connection_error(self):
        """Test that connection failures are transport errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        result = ollama(handler).send("text")
        assert isinstance(result.error, ProviderTransportError)

    def test_unexpected_exception(self):
        """Test that any other exception from the client becomes a transport error."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("boom")

        result = ollama(handler).send("text")

        assert not result.success
        assert isinstance(result.error, ProviderTransportError)
        assert "boom" in str(result.error)

    def test_malformed_json(self):
        """Test that a non-JSON body is an invalid response."""
        result = ollama(Recorder(text="not json")).send("text")
        assert isinstance(result.error, ProviderInvalidResponse)

    def test_too_short_response(self):
        """Test that responses under 10 characters are rejected."""
        result = ollama(Recorder(payload={"response": " short "})).send("text")
        assert isinstance(result.error, ProviderInvalidResponse)

    def test_missing_field(self):
        """Test that a response without the summary field is rejected."""
        result = ollama(Recorder(payload={"done": True})).send("text")
        assert isinstance(result.error, ProviderInvalidResponse)


class TestCohereProvider:
    """Tests for the Cohere provider."""

    def test_success(self):
        handler = Recorder(payload={"summary": SUMMARY_TEXT})
        provider = CohereProvider(
            default_model="command-light",
            timeout_seconds=30,
            api_key="co-key",
            client=mock_client(handler),
        )

        result = provider.send("Article text", SummaryOptions(max_length=150))

        assert result.success
        assert result.model == "command-light"
        request = handler.requests[0]
        assert request.headers["Authorization"] == "Bearer co-key"
        body = handler.body
        assert body["length"] == "medium"
        assert body["format"] == "paragraph"
        assert body["extractiveness"] == "low"
        assert body["text"] == "Article text"

    @pytest.mark.parametrize(
        "max_length, bucket", [(50, "short"), (99, "short"), (100, "medium"), (199, "medium"), (200, "long")]
    )
    def test_length_bucket(self, max_length: int, bucket: str):
        assert CohereProvider.length_bucket(max_length) == bucket

    def test_missing_key_is_unavailable(self):
        provider = CohereProvider(default_model="command-light", timeout_seconds=30)
        result = provider.send("text")
        assert isinstance(result.error, ProviderUnavailable)


class TestHuggingFaceProvider:
    """Tests for the HuggingFace provider."""

    def make(self, handler) -> HuggingFaceProvider:
        return HuggingFaceProvider(
            default_model="sshleifer/distilbart-cnn-12-6",
            timeout_seconds=60,
            api_key="hf-key",
            client=mock_client(handler),
        )

    def test_success(self):
        handler = Recorder(payload=[{"summary_text": SUMMARY_TEXT}])
        result = self.make(handler).send("Article text")

        assert result.success
        assert str(handler.requests[0].url).endswith("/models/sshleifer/distilbart-cnn-12-6")
        params = handler.body["parameters"]
        assert params["max_length"] == 200
        assert params["min_length"] == 30
        assert params["do_sample"] is False

    def test_model_limits(self):
        handler = Recorder(payload=[{"summary_text": SUMMARY_TEXT}])
        result = self.make(handler).send("Article text", SummaryOptions(model="t5-small"))

        assert result.model == "t5-small"
        assert handler.body["parameters"]["min_length"] == 20

    def test_empty_list_is_invalid(self):
        result = self.make(Recorder(payload=[])).send("Article text")
        assert isinstance(result.error, ProviderInvalidResponse)


class TestOpenAIProvider:
    """Tests for the OpenAI provider."""

    def test_success(self):
        handler = Recorder(payload={"choices": [{"message": {"content": SUMMARY_TEXT}}]})
        provider = OpenAIProvider(
            default_model="gpt-3.5-turbo",
            timeout_seconds=30,
            api_key="sk-test",
            client=mock_client(handler),
        )

        result = provider.send("Article text", SummaryOptions(max_tokens=99, temperature=0.5))

        assert result.success
        body = handler.body
        assert body["max_tokens"] == 99
        assert body["temperature"] == 0.5
        assert body["messages"][0]["role"] == "user"
        assert body["messages"][0]["content"].endswith("Article text")
        assert handler.requests[0].headers["Authorization"] == "Bearer sk-test"

    def test_malformed_payload(self):
        provider = OpenAIProvider(
            default_model="gpt-3.5-turbo",
            timeout_seconds=30,
            api_key="sk-test",
            client=mock_client(Recorder(payload={"choices": []})),
        )
        result = provider.send("Article text")
        assert isinstance(result.error, ProviderInvalidResponse)


class TestBuildProviders:
    """Tests for build_providers."""

    def test_order(self):
        providers = build_providers(ProviderSettings())
        assert [p.name for p in providers] == ["ollama", "cohere", "huggingface", "openai"]

    def test_settings_applied(self):
        settings = ProviderSettings(
            ollama_base_url=None,
            openai_api_key="sk-test",
            openai_model="gpt-4o-mini",
        )
        ollama_provider, cohere_provider, _, openai_provider = build_providers(settings)

        assert not ollama_provider.is_configured()
        assert not cohere_provider.is_configured()
        assert openai_provider.is_configured()
        assert openai_provider.default_model == "gpt-4o-mini"
