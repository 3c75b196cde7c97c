"""Pytest configuration and fixtures for embedmatch tests."""

from collections.abc import Generator

import pytest

from test_helpers import FakeProvider

from embedmatch import api, config
from embedmatch.embeddings.cache import EmbeddingCache
from embedmatch.matching.engine import Matcher


@pytest.fixture(autouse=True)
def isolate_process_state(monkeypatch, tmp_path) -> Generator[None]:
    """Keep config, env overrides and the default matcher test-local."""
    for var in (
        "EMBEDMATCH_PROVIDER",
        "EMBEDMATCH_MODEL",
        "EMBEDMATCH_DEVICE",
        "EMBEDMATCH_MAX_WORKERS",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("EMBEDMATCH_CONFIG", str(tmp_path / "config.toml"))

    config.reset_config()
    api.set_default_matcher(None)
    yield
    config.reset_config()
    api.set_default_matcher(None)


@pytest.fixture
def fake_provider() -> FakeProvider:
    """A counting fake provider with default vectors."""
    return FakeProvider()


@pytest.fixture
def cache(fake_provider: FakeProvider) -> EmbeddingCache:
    """A fresh cache in front of the fake provider."""
    return EmbeddingCache(fake_provider)


@pytest.fixture
def matcher(cache: EmbeddingCache) -> Matcher:
    """A sequential matcher over the fresh cache."""
    return Matcher(cache)
