"""
LLM Provider Factory - Creates the configured LLM provider instance.
"""

from typing import Optional
from .base import LLMProvider
from .openai_provider import OpenAIProvider
from .groq_provider import GroqProvider

GROQ_KEY_PREFIX = "gsk_"


def detect_provider(api_key: str) -> str:
    """Pick a provider from the key format: Groq keys start with "gsk_"."""
    return "groq" if api_key.startswith(GROQ_KEY_PREFIX) else "openai"


def create_llm_provider(
    provider: str = "auto",
    api_key: Optional[str] = "",
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    **kwargs
) -> Optional[LLMProvider]:
    """
    Create an LLM provider instance based on configuration.

    Args:
        provider: Provider name ("auto", "openai" or "groq")
        api_key: API key for the provider
        model: Model name (uses provider default if not specified)
        base_url: Custom base URL (uses provider default if not specified)
        **kwargs: Additional provider parameters (timeout, default_temperature, ...)

    Returns:
        LLMProvider instance, or None if api_key is not configured
    """
    if not api_key:
        return None

    if provider == "auto":
        provider = detect_provider(api_key)

    providers = {"openai": OpenAIProvider, "groq": GroqProvider}
    if provider not in providers:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    params = {"api_key": api_key}
    if model:
        params["model"] = model
    if base_url:
        params["base_url"] = base_url
    params.update(kwargs)
    return providers[provider](**params)
