class LLMProviderError(Exception):
    """The provider call failed: network error, timeout or non-2xx status."""


class LLMResponseParseError(Exception):
    """The provider answered, but the body is not usable JSON."""
