"""
AI provider integrations for goco.

Each provider implements :class:`~goco.providers.base.Provider`. Use
:func:`create_provider` to build one by name.
"""

from __future__ import annotations

from typing import Dict, Type

from goco.errors import ProviderError, ValidationError
from goco.providers.base import Provider, build_prompt, clean_commit_message, strip_thinking_tags
from goco.providers.gemini import GeminiProvider
from goco.providers.groq import GroqProvider

PROVIDERS: Dict[str, Type[Provider]] = {
    "gemini": GeminiProvider,
    "groq": GroqProvider,
}


def create_provider(name: str, api_key: str, model: str) -> Provider:
    """Instantiate the provider registered as ``name``.

    Raises
    ------
    ValidationError
        If ``name`` is not a known provider.
    ProviderError
        If the backend client cannot be constructed.
    """
    try:
        provider_class = PROVIDERS[name]
    except KeyError:
        raise ValidationError(
            "provider",
            f"unsupported provider '{name}'",
            help=f"Supported providers: {', '.join(PROVIDERS)}",
        ) from None
    try:
        return provider_class(api_key=api_key, model=model)
    except ProviderError:
        raise
    except Exception as exc:
        raise ProviderError(name, f"failed to create client: {exc}", cause=exc) from exc


__all__ = [
    "Provider",
    "GeminiProvider",
    "GroqProvider",
    "PROVIDERS",
    "create_provider",
    "build_prompt",
    "clean_commit_message",
    "strip_thinking_tags",
]
