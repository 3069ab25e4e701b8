"""Configuration management for starterkit.

Loads configuration from:
1. starterkit.toml (defaults)
2. Environment variables (overrides)
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

CONFIG_FILE_NAME = "starterkit.toml"
USER_CONFIG_DIR = Path.home() / ".starterkit"


@dataclass
class BackendConfig:
    """Remote backend configuration."""

    api_url: str = "https://api.starterkit.dev"
    timeout: float = 30.0
    download_timeout: float = 60.0


@dataclass
class AuthConfig:
    """Credential lookup configuration.

    The token itself is normally written by a separate login flow into
    ``credentials_file``; ``token`` is an explicit override.
    """

    token: str = ""
    credentials_file: str = ""  # default: ~/.starterkit/config.env


@dataclass
class StartersConfig:
    """Where project sources come from."""

    # Free products are cloned from here; {slug} is the product slug
    repository_url_template: str = "https://github.com/starterkit-templates/{slug}.git"

    # When set, blank projects are cloned from this repository instead of
    # being created as an empty directory
    blank_repository_url: str = ""

    # Public product pages, shown when a product is not available to the user
    products_url: str = "https://starterkit.dev/products"


@dataclass
class WorkflowConfig:
    """Init workflow behaviour."""

    max_prompts: int = 10
    default_package_manager: str = "npm"
    manifest_file: str = "package.json"
    jenkinsfile: bool = True
    log_level: str = "WARNING"


@dataclass
class Config:
    """Main configuration container."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    starters: StartersConfig = field(default_factory=StartersConfig)
    workflow: WorkflowConfig = field(default_factory=WorkflowConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        return cls(
            backend=BackendConfig(**data.get("backend", {})),
            auth=AuthConfig(**data.get("auth", {})),
            starters=StartersConfig(**data.get("starters", {})),
            workflow=WorkflowConfig(**data.get("workflow", {})),
        )

    @property
    def credentials_path(self) -> Path:
        if self.auth.credentials_file:
            return Path(self.auth.credentials_file).expanduser()
        return USER_CONFIG_DIR / "config.env"


def find_config_file() -> Path | None:
    """Find starterkit.toml in current or parent directories.

    Falls back to ~/.starterkit/config.toml.

    Returns:
        Path to the config file or None if not found.
    """
    current = Path.cwd()

    for directory in [current, *current.parents]:
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

    user_config = USER_CONFIG_DIR / "config.toml"
    if user_config.exists():
        return user_config

    return None


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from file and environment.

    Args:
        config_path: Optional explicit path to starterkit.toml

    Returns:
        Config object with merged settings.
    """
    config_data: dict[str, Any] = {}

    if config_path is None:
        config_path = find_config_file()

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path, "rb") as f:
                config_data = tomllib.load(f)

    env_overrides = {
        "backend": {
            "api_url": os.getenv("STARTERKIT_API_URL"),
            "timeout": _float_or_none(os.getenv("STARTERKIT_TIMEOUT")),
        },
        "auth": {
            "token": os.getenv("STARTERKIT_TOKEN"),
        },
        "workflow": {
            "default_package_manager": os.getenv("STARTERKIT_PACKAGE_MANAGER"),
            "log_level": os.getenv("STARTERKIT_LOG_LEVEL"),
        },
    }

    # Merge env overrides (only non-None values)
    for section, values in env_overrides.items():
        if section not in config_data:
            config_data[section] = {}
        for key, value in values.items():
            if value is not None:
                config_data[section][key] = value

    return Config.from_dict(config_data)


def _float_or_none(value: str | None) -> float | None:
    """Convert string to float, or return None."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config object (loaded once, cached).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Force reload of configuration.

    Returns:
        Fresh Config object.
    """
    global _config
    _config = load_config()
    return _config
