"""
Exception hierarchy for LLM provider errors.

Configuration problems (``ConfigurationError`` and subclasses) are detected
before any model call; the rest are raised while talking to the provider.
"""


class LLMProviderError(Exception):
    """Base exception for all LLM provider errors."""

    pass


class ProviderNotFoundError(LLMProviderError):
    """Raised when a requested provider is not registered."""

    pass


class ConfigurationError(LLMProviderError):
    """Raised when provider configuration is invalid."""

    pass


class MissingCredentialsError(ConfigurationError):
    """Raised when a provider that needs an API key has none."""

    def __init__(self, provider: str, message: str | None = None):
        super().__init__(message or f"No API key configured for provider '{provider}'")
        self.provider = provider


class ToolCallingNotSupportedError(ConfigurationError):
    """Raised when the configured model is known not to support function calling."""

    def __init__(self, provider: str, model_id: str):
        super().__init__(
            f"Model '{model_id}' from provider '{provider}' does not support tool calling"
        )
        self.provider = provider
        self.model_id = model_id


class AuthenticationError(LLMProviderError):
    """Raised when the provider rejects the API key."""

    pass


class APIError(LLMProviderError):
    """Raised when an API call fails."""

    def __init__(self, message: str, status_code: int | None = None, response: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ProviderTimeoutError(APIError):
    """Raised when the provider does not answer within the request timeout."""

    pass
