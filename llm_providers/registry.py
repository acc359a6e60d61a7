"""
Registry for LLM provider implementations.
"""

import logging

from .base import LLMProvider
from .exceptions import ProviderNotFoundError
from .types import LLMConfig

logger = logging.getLogger(__name__)


class LLMProviderRegistry:
    """
    Maps provider names (and aliases) to provider classes.

    Provider modules register themselves on import, so ``import llm_providers``
    is enough to make the built-in providers available.

    Example:
        # Registration (in the provider module)
        LLMProviderRegistry.register("local", LocalModelProvider, aliases=["ollama"])

        # Usage
        config = resolve_llm_config()
        provider = LLMProviderRegistry.from_config(config)
    """

    _providers: dict[str, type[LLMProvider]] = {}
    _aliases: dict[str, str] = {}
    _default: str | None = None

    @classmethod
    def register(
        cls,
        name: str,
        provider_class: type[LLMProvider],
        *,
        aliases: list[str] | tuple[str, ...] = (),
        set_default: bool = False,
    ) -> None:
        """
        Register a provider implementation.

        Args:
            name: Canonical provider identifier (e.g., 'openai', 'local').
            provider_class: The provider class.
            aliases: Other names that resolve to this provider.
            set_default: If True, use this provider when no name is given.
        """
        cls._providers[name] = provider_class
        for alias in aliases:
            cls._aliases[alias] = name

        if set_default or cls._default is None:
            cls._default = name

        logger.debug("Registered LLM provider: %s (aliases: %s)", name, list(aliases))

    @classmethod
    def resolve_name(cls, name: str | None) -> str:
        """
        Canonical provider name for a name, alias or None (the default).

        Raises:
            ProviderNotFoundError: If nothing is registered under that name.
        """
        name = name or cls._default
        if not name:
            raise ProviderNotFoundError("No provider specified and no default set")

        name = cls._aliases.get(name, name)
        if name not in cls._providers:
            available = ", ".join(sorted([*cls._providers, *cls._aliases]))
            raise ProviderNotFoundError(
                f"Provider '{name}' not found. Available: {available}"
            )
        return name

    @classmethod
    def get(
        cls,
        name: str | None = None,
        config: LLMConfig | None = None,
    ) -> LLMProvider:
        """
        Get a provider instance by name.

        Raises:
            ProviderNotFoundError: If the provider is not registered.
            ConfigurationError: If the provider rejects the configuration.
        """
        return cls._providers[cls.resolve_name(name)](config)

    @classmethod
    def from_config(cls, config: LLMConfig) -> LLMProvider:
        """Instantiate the provider a resolved ``LLMConfig`` names."""
        return cls.get(config.provider, config=config)

