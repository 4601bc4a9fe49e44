"""
Unit tests for the LLM module.
Tests LLMMessage, LLMResponse, providers, and factory.
"""

import pytest
import httpx
from unittest.mock import AsyncMock, patch, MagicMock

from healthapp.llm.base import LLMMessage, LLMResponse
from healthapp.llm.openai_provider import OpenAIProvider
from healthapp.llm.groq_provider import GroqProvider
from healthapp.llm.factory import create_llm_provider, detect_provider


def _mock_client(mock_client, response):
    mock_instance = AsyncMock()
    mock_instance.post.return_value = response
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_client.return_value = mock_instance
    return mock_instance


class TestLLMMessage:
    """Tests for LLMMessage dataclass."""

    def test_text_message(self):
        msg = LLMMessage.text("user", "Hello")
        assert msg.role == "user"
        assert msg.content == "Hello"

    def test_system_message(self):
        msg = LLMMessage.text("system", "You are a helpful assistant")
        assert msg.role == "system"


class TestLLMResponse:
    """Tests for LLMResponse dataclass."""

    def test_basic_response(self):
        resp = LLMResponse(content="Hello!", model="gpt-4o-mini")
        assert resp.content == "Hello!"
        assert resp.usage == {}
        assert resp.raw is None


class TestOpenAIProvider:
    """Tests for OpenAI-compatible provider."""

    def test_init_defaults(self):
        provider = OpenAIProvider(api_key="test-key")
        assert provider.api_key == "test-key"
        assert provider.model == "gpt-4o-mini"
        assert provider.base_url == "https://api.openai.com/v1"
        assert provider.timeout == 30.0

    def test_format_messages(self):
        provider = OpenAIProvider(api_key="test")
        messages = [
            LLMMessage.text("system", "sys prompt"),
            LLMMessage.text("user", "hello")
        ]
        formatted = provider._format_messages(messages)
        assert formatted == [
            {"role": "system", "content": "sys prompt"},
            {"role": "user", "content": "hello"},
        ]

    def test_headers(self):
        provider = OpenAIProvider(api_key="sk-test123")
        headers = provider._get_headers()
        assert headers["Authorization"] == "Bearer sk-test123"
        assert headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_chat_completion_success(self):
        provider = OpenAIProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "choices": [{"message": {"content": "Test response"}}],
            "model": "gpt-4o-mini",
            "usage": {"prompt_tokens": 10, "completion_tokens": 5}
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            instance = _mock_client(mock_client, mock_response)

            result = await provider.chat_completion(
                [LLMMessage.text("user", "Hello")], temperature=0.7, max_tokens=1000
            )

            assert result.content == "Test response"
            assert result.usage["prompt_tokens"] == 10
            url = instance.post.call_args.args[0]
            payload = instance.post.call_args.kwargs["json"]
            assert url == "https://api.openai.com/v1/chat/completions"
            assert payload["model"] == "gpt-4o-mini"
            assert payload["temperature"] == 0.7
            assert payload["max_tokens"] == 1000

    @pytest.mark.asyncio
    async def test_chat_completion_http_error_raises(self):
        provider = OpenAIProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "401 Unauthorized", request=MagicMock(), response=MagicMock()
        )

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, mock_response)
            with pytest.raises(httpx.HTTPStatusError):
                await provider.chat_completion([LLMMessage.text("user", "Hello")])

    @pytest.mark.asyncio
    async def test_empty_choices_give_empty_content(self):
        provider = OpenAIProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {"choices": []}
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, mock_response)
            result = await provider.chat_completion([LLMMessage.text("user", "Hello")])
            assert result.content == ""


class TestGroqProvider:
    """Tests for Groq provider."""

    def test_init_defaults(self):
        provider = GroqProvider(api_key="gsk_test")
        assert provider.model == "llama-3.1-8b-instant"
        assert provider.base_url == "https://api.groq.com/openai/v1"
        assert provider.name == "groq"

    @pytest.mark.asyncio
    async def test_chat_completion_uses_groq_endpoint(self):
        provider = GroqProvider(api_key="gsk_test")
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "choices": [{"message": {"content": "Groq reply"}}],
            "model": "llama-3.1-8b-instant",
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            instance = _mock_client(mock_client, mock_response)
            result = await provider.chat_completion([LLMMessage.text("user", "Hi")])

            assert result.content == "Groq reply"
            assert instance.post.call_args.args[0] == "https://api.groq.com/openai/v1/chat/completions"


class TestLLMFactory:
    """Tests for LLM provider factory."""

    def test_detect_provider(self):
        assert detect_provider("gsk_abc") == "groq"
        assert detect_provider("sk-abc") == "openai"

    def test_auto_detects_groq(self):
        provider = create_llm_provider(provider="auto", api_key="gsk_abc")
        assert isinstance(provider, GroqProvider)

    def test_auto_defaults_to_openai(self):
        provider = create_llm_provider(provider="auto", api_key="sk-abc")
        assert type(provider) is OpenAIProvider

    def test_create_openai_provider(self):
        provider = create_llm_provider(
            provider="openai",
            api_key="test-key",
            model="gpt-4o"
        )
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_no_api_key_returns_none(self):
        assert create_llm_provider(provider="openai", api_key="") is None
        assert create_llm_provider(provider="auto", api_key=None) is None

    def test_unsupported_provider_raises(self):
        with pytest.raises(ValueError, match="Unsupported"):
            create_llm_provider(provider="unsupported", api_key="key")

    def test_custom_base_url_and_timeout(self):
        provider = create_llm_provider(
            provider="openai",
            api_key="key",
            base_url="https://custom.api.com/v1",
            timeout=5.0,
        )
        assert provider.base_url == "https://custom.api.com/v1"
        assert provider.timeout == 5.0
