"""
Model resolution and validation.

The effective model is the ``--model`` value, else the provider's
default. Whether it exists is decided by the provider's own model list.
"""

from __future__ import annotations

import logging
from typing import Optional

from goco.errors import ProviderError, ValidationError
from goco.providers.base import Provider
from goco.providers.gemini import DEFAULT_MODEL as GEMINI_DEFAULT_MODEL
from goco.providers.groq import DEFAULT_MODEL as GROQ_DEFAULT_MODEL


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_MODELS = {
    "gemini": GEMINI_DEFAULT_MODEL,
    "groq": GROQ_DEFAULT_MODEL,
}


def resolve_model(provider_name: str, requested: Optional[str] = None) -> str:
    """Return ``requested`` or the default model of ``provider_name``."""
    if requested:
        return requested
    try:
        return DEFAULT_MODELS[provider_name]
    except KeyError:
        raise ValidationError(
            "provider",
            f"unsupported provider '{provider_name}'",
            help=f"Supported providers: {', '.join(DEFAULT_MODELS)}",
        ) from None


def model_listing_hint(provider_name: str) -> str:
    return f"Run 'goco models --provider {provider_name}' to see the available models."


def validate_model(provider: Provider, model: str) -> None:
    """Check that ``model`` is offered by ``provider``.

    Raises
    ------
    ValidationError
        If the model is unavailable or the model list cannot be fetched.
        The error is not retried.
    """
    logger.debug("Validating model %s against %s", model, provider.name)
    try:
        provider.validate_model(model)
    except ProviderError as exc:
        raise ValidationError(
            "model",
            exc.message,
            help=model_listing_hint(provider.name),
            cause=exc,
        ) from exc
