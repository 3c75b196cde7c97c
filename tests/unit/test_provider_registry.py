"""Unit tests for provider registry functionality."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from test_helpers import FakeProvider

from embedmatch.providers import (
    LocalEmbeddingProvider,
    OpenAIEmbeddingProvider,
    ProviderRegistry,
)


@pytest.fixture
def restore_registry():
    """Restore the registry contents after a test mutates it."""
    saved = dict(ProviderRegistry._providers)
    yield
    ProviderRegistry._providers.clear()
    ProviderRegistry._providers.update(saved)


class TestProviderRegistry:
    """Test ProviderRegistry functionality."""

    def test_builtin_providers_registered(self) -> None:
        """Test that the bundled providers are available by name."""
        assert ProviderRegistry.get("openai") is OpenAIEmbeddingProvider
        assert ProviderRegistry.get("local") is LocalEmbeddingProvider
        assert ProviderRegistry.available()[:2] == ["openai", "local"]

    def test_register_and_create(self, restore_registry) -> None:
        """Test registering a provider and instantiating it with kwargs."""
        ProviderRegistry.register("fake", FakeProvider)

        provider = ProviderRegistry.create("fake", delay=0.5)

        assert isinstance(provider, FakeProvider)
        assert provider.delay == 0.5

    def test_unknown_provider_lists_available(self) -> None:
        """Test that unknown names raise KeyError with the available names."""
        with pytest.raises(KeyError, match="Provider 'nope' not found.*openai"):
            ProviderRegistry.get("nope")

    def test_empty_registry_message(self, restore_registry) -> None:
        """Test the error message when nothing is registered."""
        ProviderRegistry._providers.clear()
        with pytest.raises(KeyError, match="Available providers: none"):
            ProviderRegistry.get("openai")
