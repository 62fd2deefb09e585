"""Configuration management for sdl-summarizer."""

from dataclasses import dataclass
from typing import Any, Optional

import yaml

from . import utils

DEFAULT_CONFIG_PATH = "~/.sdl-summarizer/config.yaml"
DEFAULT_SCHEMA_CACHE_DIR = "~/.sdl-summarizer/schemas"
DEFAULT_TITLE = "GraphQL Schema Documentation"


class ConfigError(ValueError):
    """Configuration file exists but cannot be used."""


@dataclass
class Config:
    """Configuration for sdl-summarizer."""

    default_url: Optional[str] = None
    token: Optional[str] = None
    schema_cache_dir: str = DEFAULT_SCHEMA_CACHE_DIR
    output: str = "console"

    # API metadata shown in the documentation header
    api_name: Optional[str] = None
    api_version: Optional[str] = None
    api_description: Optional[str] = None
    provider: Optional[str] = None
    production_url: Optional[str] = None
    sandbox_url: Optional[str] = None

    def __post_init__(self):
        """Expand paths after initialization."""
        self.schema_cache_dir = utils.expand_path(self.schema_cache_dir)

    @property
    def title(self) -> str:
        return self.api_name or DEFAULT_TITLE

    def api_metadata(self) -> dict[str, Any]:
        """Header metadata, omitting unset values."""
        data = {
            "name": self.title,
            "version": self.api_version,
            "description": self.api_description,
            "provider": self.provider,
            "productionURL": self.production_url,
            "sandboxURL": self.sandbox_url,
        }
        return {k: v for k, v in data.items() if v is not None}


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path(DEFAULT_CONFIG_PATH)


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    if config_path is None:
        config_path = get_default_config_path()

    # Return defaults if config doesn't exist
    if not utils.exists(config_path):
        return Config()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {config_path}: expected a mapping")

    api = _section(data, "api", config_path)
    endpoints = _section(data, "endpoints", config_path)

    # Merge with defaults
    return Config(
        default_url=data.get("default_url"),
        token=data.get("token"),
        schema_cache_dir=data.get("schema_cache_dir", DEFAULT_SCHEMA_CACHE_DIR),
        output=data.get("output", "console"),
        api_name=api.get("name"),
        api_version=api.get("version"),
        api_description=api.get("description"),
        provider=data.get("provider"),
        production_url=endpoints.get("production"),
        sandbox_url=endpoints.get("sandbox"),
    )


def _section(data: dict, key: str, config_path: str) -> dict:
    """Nested mapping under key; empty when absent."""
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid config file {config_path}: '{key}' must be a mapping")
    return section


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "default_url": "https://api.example.com/graphql",
        "schema_cache_dir": DEFAULT_SCHEMA_CACHE_DIR,
        "output": "console",
        "api": {
            "name": "Example API",
            "version": "v1",
            "description": "Public GraphQL API",
        },
        "provider": "Example Inc.",
        "endpoints": {
            "production": "https://api.example.com/graphql",
            "sandbox": "https://sandbox.example.com/graphql",
        },
    }

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
