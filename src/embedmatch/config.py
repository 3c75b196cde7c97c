"""Configuration management for embedmatch.

Loads configuration from ~/.config/embedmatch/config.toml when it exists,
falling back to built-in defaults otherwise.
Priority chain: env vars > config file > defaults.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_DIR = Path.home() / ".config" / "embedmatch"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG = """\
# embedmatch configuration

[provider]
# Provider: "openai" (remote API), "local" (sentence-transformers)
name = "openai"

# Embedding model ID
# openai: text-embedding-3-small, text-embedding-3-large
# local:  all-mpnet-base-v2, all-MiniLM-L6-v2
model = "text-embedding-3-small"

# Compute device for local models: "auto", "mps" (Apple Silicon), "cuda", "cpu"
device = "auto"

[matching]
# Concurrent provider calls while embedding a batch of candidates
max_workers = 4

# API keys are read from environment variables, not this file:
#   OPENAI_API_KEY  - OpenAI provider
"""


@dataclass(frozen=True)
class ProviderConfig:
    """Embedding provider configuration."""

    name: str
    model: str
    device: str


@dataclass(frozen=True)
class MatchingConfig:
    """Matching engine configuration."""

    max_workers: int


@dataclass(frozen=True)
class EmbedmatchConfig:
    """Top-level embedmatch configuration."""

    provider: ProviderConfig
    matching: MatchingConfig


_cached_config: EmbedmatchConfig | None = None


def get_config_path() -> Path:
    """Return the config file path, honouring EMBEDMATCH_CONFIG."""
    override = os.getenv("EMBEDMATCH_CONFIG")
    return Path(override).expanduser() if override else CONFIG_PATH


def generate_config(path: Path | None = None) -> Path:
    """Write the default config file and return its path."""
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG)
    return path


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return tomllib.loads(DEFAULT_CONFIG)

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def _parse_max_workers(value: Any) -> int:
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as e:
            raise ConfigError(
                f"matching.max_workers must be an integer, got {value!r}"
            ) from e
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"matching.max_workers must be an integer, got {value!r}")
    if value < 1:
        raise ConfigError(f"matching.max_workers must be at least 1, got {value!r}")
    return value


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


def load_config() -> EmbedmatchConfig:
    """Load configuration from config file with env var overrides.

    Returns:
        Loaded and validated EmbedmatchConfig.

    Raises:
        ConfigError: If the config file or an override is invalid.
    """
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    data = _read_config_file(get_config_path())
    defaults = tomllib.loads(DEFAULT_CONFIG)

    provider = {**defaults["provider"], **_section(data, "provider")}
    matching = {**defaults["matching"], **_section(data, "matching")}

    for key in ("name", "model", "device"):
        if not isinstance(provider[key], str):
            raise ConfigError(
                f"provider.{key} must be a string, got {provider[key]!r}"
            )

    # Env vars override config file values
    _cached_config = EmbedmatchConfig(
        provider=ProviderConfig(
            name=os.getenv("EMBEDMATCH_PROVIDER", provider["name"]),
            model=os.getenv("EMBEDMATCH_MODEL", provider["model"]),
            device=os.getenv("EMBEDMATCH_DEVICE", provider["device"]),
        ),
        matching=MatchingConfig(
            max_workers=_parse_max_workers(
                os.getenv("EMBEDMATCH_MAX_WORKERS", matching["max_workers"])
            ),
        ),
    )

    return _cached_config


def reset_config() -> None:
    """Forget the loaded configuration so the next load re-reads it."""
    global _cached_config
    _cached_config = None
