"""
Configuration loader for goco.

The configuration is an optional JSON file named ``config.json`` located
in ``$XDG_CONFIG_HOME/goco/`` (``~/.config/goco/`` when the variable is
not set). It only names the environment variables holding the provider
API keys and the default provider::

    {
        "general": {
            "api_key_gemini_env_variable": "GOCO_GEMINI_KEY",
            "api_key_groq_env_variable": "GOCO_GROQ_KEY",
            "default_provider": "gemini"
        }
    }

A missing file yields the defaults. A file that cannot be read or
parsed, or that holds values of the wrong type, raises a
:class:`~goco.errors.ConfigError`.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from goco.errors import ConfigError


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings when goco is used
# as a library. Messages propagate once the CLI configures logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_GEMINI_ENV = "GOCO_GEMINI_KEY"
DEFAULT_GROQ_ENV = "GOCO_GROQ_KEY"
DEFAULT_PROVIDER = "gemini"
SUPPORTED_PROVIDERS = ("gemini", "groq")

_GENERAL_KEYS = {
    "api_key_gemini_env_variable": "gemini_api_key_env",
    "api_key_groq_env_variable": "groq_api_key_env",
    "default_provider": "default_provider",
}


@dataclass
class Config:
    """Effective goco configuration.

    Attributes
    ----------
    gemini_api_key_env : str
        Name of the environment variable holding the Gemini API key.
    groq_api_key_env : str
        Name of the environment variable holding the Groq API key.
    default_provider : str
        Provider used when ``--provider`` is not given.
    """

    gemini_api_key_env: str = DEFAULT_GEMINI_ENV
    groq_api_key_env: str = DEFAULT_GROQ_ENV
    default_provider: str = DEFAULT_PROVIDER

    def api_key_env(self, provider: str) -> str:
        """Return the environment variable name for ``provider``'s API key."""
        if provider == "groq":
            return self.groq_api_key_env or DEFAULT_GROQ_ENV
        return self.gemini_api_key_env or DEFAULT_GEMINI_ENV

    def get_api_key(self, provider: str) -> str:
        return os.environ.get(self.api_key_env(provider), "")

    def get_gemini_api_key(self) -> str:
        return self.get_api_key("gemini")

    def get_groq_api_key(self) -> str:
        return self.get_api_key("groq")

    def get_default_provider(self) -> str:
        return self.default_provider or DEFAULT_PROVIDER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "general": {
                file_key: getattr(self, attr)
                for file_key, attr in _GENERAL_KEYS.items()
            }
        }


def get_config_path() -> Path:
    """Return the location of the goco configuration file."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "goco" / "config.json"


def load_config(path: Optional[Path] = None) -> Config:
    """Load the goco configuration.

    Args:
        path: Explicit configuration file. Defaults to :func:`get_config_path`.

    Returns:
        The validated :class:`Config`. Defaults are returned when the file
        does not exist.

    Raises:
        ConfigError: If the file is unreadable, malformed or invalid.
    """
    config_path = path or get_config_path()
    config = Config()

    if not config_path.exists():
        logger.debug("No configuration file at %s, using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(str(config_path), f"invalid JSON: {exc}", cause=exc) from exc

    if not isinstance(data, dict):
        raise ConfigError(str(config_path), "top level must be an object")

    general = data.get("general", {})
    if not isinstance(general, dict):
        raise ConfigError("general", "must be an object")

    for file_key, attr in _GENERAL_KEYS.items():
        if file_key not in general:
            continue
        value = general[file_key]
        if not isinstance(value, str):
            raise ConfigError(file_key, "must be a string")
        if value:
            setattr(config, attr, value)

    if config.default_provider not in SUPPORTED_PROVIDERS:
        raise ConfigError(
            "default_provider",
            f"unsupported provider '{config.default_provider}' "
            f"(supported: {', '.join(SUPPORTED_PROVIDERS)})",
        )

    logger.debug("Loaded configuration from: %s", config_path)
    return config


def create_config_file(config: Optional[Config] = None, path: Optional[Path] = None) -> Path:
    """Write ``config`` (defaults when omitted) to disk and return the path."""
    config_path = path or get_config_path()
    config = config or Config()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(str(config_path), f"could not write file: {exc}", cause=exc) from exc
    logger.debug("Wrote configuration to: %s", config_path)
    return config_path
