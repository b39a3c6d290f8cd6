"""Abstract base class that all LLM providers must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shared.llm_adapter.models import LLMRequest, LLMResponse


class LLMProvider(ABC):
    """
    Contract for LLM providers.

    Every implementation MUST:
    - Send the system prompt and the user prompt as separate segments
    - Request strict JSON output when ``request.json_mode`` is set
    - Raise LLMProviderError for transport and HTTP failures
    """

    name: str = "base"

    @abstractmethod
    async def generate(self, request: LLMRequest) -> LLMResponse:
        """Send a prompt and return the model's response."""

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
