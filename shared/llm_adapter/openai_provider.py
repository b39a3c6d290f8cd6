"""
OpenAI-compatible LLM provider.

Works with any API that speaks the OpenAI Chat Completions protocol:
  - Google      (base_url=https://generativelanguage.googleapis.com/v1beta/openai/)
  - OpenAI      (base_url=https://api.openai.com/v1)
  - Groq        (base_url=https://api.groq.com/openai/v1)
  - OpenRouter  (base_url=https://openrouter.ai/api/v1)

Gemini is the default backend; structured output is requested with
``response_format={"type": "json_object"}``.
"""

from __future__ import annotations

from openai import AsyncOpenAI, OpenAIError

from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.exceptions import LLMProviderError
from shared.llm_adapter.models import LLMRequest, LLMResponse

BASE_URLS: dict[str, str] = {
    "gemini":     "https://generativelanguage.googleapis.com/v1beta/openai/",
    "openai":     "https://api.openai.com/v1",
    "groq":       "https://api.groq.com/openai/v1",
    "openrouter": "https://openrouter.ai/api/v1",
}

DEFAULT_MODELS: dict[str, str] = {
    "gemini":     "gemini-2.5-flash",
    "openai":     "gpt-4o-mini",
    "groq":       "llama-3.3-70b-versatile",
    "openrouter": "meta-llama/llama-3.3-70b-instruct:free",
}


class OpenAIProvider(LLMProvider):
    """OpenAI Chat Completions adapter."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        provider_name: str = "gemini",
        timeout: float = 60.0,
    ) -> None:
        if not api_key:
            raise ValueError(f"An API key is required for provider '{provider_name}'.")

        self.name = provider_name
        self._base_url = base_url or BASE_URLS.get(provider_name, BASE_URLS["openai"])
        self._model = model or DEFAULT_MODELS.get(provider_name, "gpt-4o-mini")
        # Retries are driven by JSONGenerator so the prompt can change between attempts.
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, request: LLMRequest) -> LLMResponse:
        model = request.model or self._model

        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.prompt})

        kwargs = {}
        if request.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=request.temperature,
                max_tokens=request.max_tokens,
                messages=messages,
                **kwargs,
            )
        except OpenAIError as exc:
            raise LLMProviderError(f"{self.name} request failed: {exc}") from exc

        if not response.choices:
            raise LLMProviderError(f"{self.name} returned no choices")

        choice = response.choices[0]
        usage = response.usage

        return LLMResponse(
            content=choice.message.content or "",
            model=response.model or model,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
        )

    async def aclose(self) -> None:
        await self._client.close()
