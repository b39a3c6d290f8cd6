"""
Scripted mock LLM provider for tests and local development.

Replies are consumed in order; a reply that is an exception instance is
raised instead of returned. Once the script is exhausted the last reply is
repeated. Every request is recorded so callers can inspect the prompts.
"""

from __future__ import annotations

import json
from typing import Any

from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.models import LLMRequest, LLMResponse


class MockProvider(LLMProvider):

    name = "mock"

    def __init__(self, replies: list[Any] | None = None) -> None:
        self._replies = list(replies or [])
        self._call_count = 0
        self.requests: list[LLMRequest] = []

    @property
    def call_count(self) -> int:
        return self._call_count

    async def generate(self, request: LLMRequest) -> LLMResponse:
        self._call_count += 1
        self.requests.append(request)

        if not self._replies:
            reply: Any = "{}"
        else:
            index = min(self._call_count - 1, len(self._replies) - 1)
            reply = self._replies[index]

        if isinstance(reply, BaseException):
            raise reply
        content = reply if isinstance(reply, str) else json.dumps(reply)

        fake_prompt_tokens = len(request.prompt.split())
        fake_completion_tokens = len(content.split())

        return LLMResponse(
            content=content,
            model="mock-scripted",
            prompt_tokens=fake_prompt_tokens,
            completion_tokens=fake_completion_tokens,
            total_tokens=fake_prompt_tokens + fake_completion_tokens,
        )
