"""
Groq LLM Provider.
Groq serves an OpenAI-compatible Chat Completions API; only the endpoint
and the default model differ.
"""

from .openai_provider import OpenAIProvider


class GroqProvider(OpenAIProvider):
    """Provider for Groq (keys start with "gsk_")."""

    name = "groq"

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.1-8b-instant",
        base_url: str = "https://api.groq.com/openai/v1",
        default_temperature: float = 0.7,
        default_max_tokens: int = 1000,
        timeout: float = 30.0,
    ):
        super().__init__(api_key, model, base_url, default_temperature, default_max_tokens, timeout)
