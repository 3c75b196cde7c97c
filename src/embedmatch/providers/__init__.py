"""Provider abstraction for embedding services.

This module provides a registry pattern for managing embedding providers,
allowing runtime selection of different embedding backends.
"""

from typing import Any, ClassVar

from .base import EmbeddingProvider
from .local import LocalEmbeddingProvider
from .openai import OpenAIEmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "LocalEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "ProviderRegistry",
]


class ProviderRegistry:
    """Registry for managing embedding providers.

    This class maintains a registry of available provider classes,
    allowing registration and retrieval by name.
    """

    _providers: ClassVar[dict[str, type[EmbeddingProvider]]] = {}

    @classmethod
    def register(cls, name: str, provider_class: type[EmbeddingProvider]) -> None:
        """Register an embedding provider.

        Args:
            name: Name to register the provider under
            provider_class: Provider class that implements EmbeddingProvider
        """
        cls._providers[name] = provider_class

    @classmethod
    def get(cls, name: str) -> type[EmbeddingProvider]:
        """Get a provider class by name.

        Args:
            name: Name of the provider to retrieve

        Returns:
            Provider class

        Raises:
            KeyError: If provider name not found
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys()) if cls._providers else "none"
            raise KeyError(
                f"Provider '{name}' not found. Available providers: {available}"
            )
        return cls._providers[name]

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> EmbeddingProvider:
        """Instantiate a registered provider.

        Args:
            name: Name of the provider
            **kwargs: Passed through to the provider constructor

        Returns:
            New provider instance

        Raises:
            KeyError: If provider name not found
        """
        return cls.get(name)(**kwargs)

    @classmethod
    def available(cls) -> list[str]:
        """Return registered provider names in registration order."""
        return list(cls._providers)


# Register providers
ProviderRegistry.register("openai", OpenAIEmbeddingProvider)
ProviderRegistry.register("local", LocalEmbeddingProvider)
