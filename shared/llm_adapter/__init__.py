from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.exceptions import LLMProviderError, LLMResponseParseError
from shared.llm_adapter.factory import build_llm_provider
from shared.llm_adapter.json_generator import JSONGenerator, ModelPricing
from shared.llm_adapter.models import LLMRequest, LLMResponse
from shared.llm_adapter.mock_provider import MockProvider

__all__ = [
    "LLMProvider",
    "LLMProviderError",
    "LLMRequest",
    "LLMResponse",
    "LLMResponseParseError",
    "JSONGenerator",
    "MockProvider",
    "ModelPricing",
    "build_llm_provider",
]
