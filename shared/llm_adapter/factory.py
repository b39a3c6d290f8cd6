"""
Provider factory.

Builds the provider for the configured backend, or returns None when no
credential is available so the caller can run in demo mode. There is no
module-level singleton: the service context owns the instance.

Supported providers:

  mock        Scripted mock, no API key needed
  gemini      Google AI   -- OpenAI-compatible endpoint (default)
  openai      OpenAI API
  groq        Groq API
  openrouter  OpenRouter
  local       Any OpenAI-compatible local server (Ollama / LM Studio)
"""

from __future__ import annotations

import logging

from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.mock_provider import MockProvider

logger = logging.getLogger(__name__)

_OPENAI_COMPATIBLE = {"openai", "groq", "gemini", "openrouter", "local"}


def build_llm_provider(
    provider_name: str,
    api_key: str = "",
    model: str | None = None,
    base_url: str | None = None,
    timeout: float = 60.0,
) -> LLMProvider | None:
    """
    Return a provider for ``provider_name``.

    Returns None when the backend needs a credential and none is set.
    Raises ValueError for an unknown provider name.
    """
    name = provider_name.lower()

    if name == "mock":
        logger.info("LLM provider initialized: mock")
        return MockProvider()

    if name not in _OPENAI_COMPATIBLE:
        raise ValueError(
            f"Unknown LLM provider '{name}'. "
            f"Available: mock, gemini, openai, groq, openrouter, local"
        )

    # Local servers usually accept any key.
    if not api_key and name == "local":
        api_key = "local-placeholder-key"
    if not api_key:
        logger.warning("No credential configured for LLM provider %s", name)
        return None

    from shared.llm_adapter.openai_provider import OpenAIProvider

    provider = OpenAIProvider(
        api_key=api_key,
        base_url=base_url,
        model=model,
        provider_name=name,
        timeout=timeout,
    )
    logger.info("LLM provider initialized: %s (model=%s)", name, provider.model)
    return provider
