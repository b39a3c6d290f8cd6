"""
Tests for the provider factory.
"""

import pytest

from shared.llm_adapter import MockProvider, build_llm_provider
from shared.llm_adapter.openai_provider import OpenAIProvider


def test_mock_provider_needs_no_key():
    assert isinstance(build_llm_provider("mock"), MockProvider)


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError, match="Unknown LLM provider"):
        build_llm_provider("watsonx", api_key="k")


def test_missing_credential_returns_none():
    assert build_llm_provider("gemini", api_key="") is None


def test_gemini_provider_uses_openai_compatible_endpoint():
    provider = build_llm_provider("Gemini", api_key="k", model="gemini-2.5-flash")

    assert isinstance(provider, OpenAIProvider)
    assert provider.name == "gemini"
    assert provider.model == "gemini-2.5-flash"


def test_local_provider_gets_placeholder_key():
    provider = build_llm_provider("local")

    assert isinstance(provider, OpenAIProvider)


def test_openai_provider_requires_key():
    with pytest.raises(ValueError):
        OpenAIProvider(api_key="")
