"""
Commit message generation with a progress indicator.

The provider call runs on a worker thread while the progress indicator
renders. The indicator is stopped only once the call has returned, and
:func:`generate_commit_message` waits for it to finish rendering before
handing back the result, so the terminal is clean on every exit path.

Pressing Ctrl+C while waiting stops the indicator but not the request:
the backend call cannot be cancelled and is still awaited.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional

from goco.errors import APIError, ProviderError
from goco.providers.base import Provider
from goco.ui import ProgressIndicator


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class GenerationRequest:
    status: str
    diff: str
    custom_instructions: str = ""


@dataclass
class GenerationResult:
    """Generated message plus where it came from."""

    message: str
    provider: str
    model: str
    edited: bool = False


def build_custom_instructions(
    commit_type: Optional[str] = None,
    breaking_change: bool = False,
    extra: Optional[str] = None,
) -> str:
    """Turn the generate options into the free-text instructions block."""
    lines: List[str] = []
    if commit_type:
        lines.append(f"Use the commit type '{commit_type}'.")
    if breaking_change:
        lines.append(
            "This is a breaking change: add '!' after the type/scope and a "
            "'BREAKING CHANGE:' footer describing it."
        )
    if extra and extra.strip():
        lines.append(extra.strip())
    return "\n".join(lines)


def _await_result(future: "Future[str]", indicator: ProgressIndicator) -> str:
    while True:
        try:
            return future.result()
        except KeyboardInterrupt:
            logger.debug("Interrupted, stopping the progress indicator only")
            indicator.stop()


def generate_commit_message(
    provider: Provider,
    request: GenerationRequest,
    indicator_factory: Callable[[str], ProgressIndicator] = ProgressIndicator,
) -> GenerationResult:
    """Generate a commit message for ``request`` using ``provider``.

    Raises
    ------
    APIError
        Wrapping whatever the provider call raised.
    """
    indicator = indicator_factory("Generating commit message")
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="goco-generate") as executor:
        future = executor.submit(
            provider.generate_commit_message,
            request.status,
            request.diff,
            request.custom_instructions,
        )
        indicator.start()
        try:
            message = _await_result(future, indicator)
        except ProviderError as exc:
            raise APIError(f"{provider.name} generation failed", cause=exc) from exc
        except Exception as exc:
            logger.error("Unexpected error from %s: %s", provider.name, exc)
            raise APIError(f"{provider.name} generation failed", cause=exc) from exc
        finally:
            indicator.stop()

    logger.debug("Generated message with %s", provider.display_name)
    return GenerationResult(message=message, provider=provider.name, model=provider.model)
