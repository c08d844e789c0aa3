"""
Provider base class and shared prompt handling.

A provider turns a git status and diff into a commit message using an AI
backend. All providers expose the same three operations so that the
pipeline never needs to know which backend it talks to.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import requests

from goco.errors import ProviderError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONVENTIONAL_COMMITS_CHEATSHEET = (
    "https://gist.githubusercontent.com/qoomon/5dfcdf8eec66a051ecd85625518cfd13/raw/"
    "d7d529a329079616d47dcf100bd7d2d2c848e835/conventional-commits-cheatsheet.md"
)

PROMPT_RULES = (
    "Before responding, you MUST:\n"
    "- Read: " + CONVENTIONAL_COMMITS_CHEATSHEET + "\n"
    "- ONLY output the commit message and description.\n"
    "- DO NOT include markdown, code blocks, quotes, or any formatting.\n"
    "- Output MUST be plain text only.\n"
    "- Do not add extra explanations, notes, or commentary.\n"
    "- The first line is the commit summary, the rest is the description.\n"
    "- Follow Conventional Commit standards exactly.\n"
    "- No extra lines before or after the commit message.\n"
)


def build_prompt(status: str, diff: str, custom_instructions: str = "") -> str:
    """Build the generation prompt with the status and diff embedded verbatim."""
    prompt = (
        "Generate a Conventional Commit based strictly on the following:\n\n"
        f"Git Status:\n{status}\n\n"
        f"Git Diff:\n{diff}\n\n"
        + PROMPT_RULES
    )
    if custom_instructions:
        prompt += f"\n\nAdditional Instructions:\n{custom_instructions}\n"
    return prompt


_THINKING_PATTERNS = [
    r"<think>.*?</think>",
    r"<thinking>.*?</thinking>",
    r"<thought>.*?</thought>",
    r"<reasoning>.*?</reasoning>",
]
_FENCE_RE = re.compile(r"^```[\w-]*\n(.*?)\n?```$", re.DOTALL)


def strip_thinking_tags(text: str) -> str:
    """Remove reasoning blocks emitted by thinking models.

    >>> strip_thinking_tags("<think>reasoning...</think>feat: add x")
    'feat: add x'
    """
    result = text
    for pattern in _THINKING_PATTERNS:
        result = re.sub(pattern, "", result, flags=re.DOTALL | re.IGNORECASE)
    return result.strip()


def clean_commit_message(text: str) -> str:
    """Strip reasoning blocks and a wrapping code fence from a model reply."""
    result = strip_thinking_tags(text)
    match = _FENCE_RE.match(result)
    if match:
        result = match.group(1)
    return result.strip()


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    provider: str,
    **kwargs: Any,
) -> Dict[str, Any]:
    """Send an HTTP request to a backend and decode the JSON reply.

    No timeout is passed; the call blocks until the backend answers.

    Raises
    ------
    ProviderError
        On transport errors, non-2xx statuses or an undecodable body.
    """
    logger.debug("Sending %s request to %s", method, url)
    try:
        response = session.request(method, url, **kwargs)
    except requests.RequestException as exc:
        logger.error("Failed to connect to %s: %s", provider, exc)
        raise ProviderError(provider, f"request failed: {exc}", cause=exc) from exc
    if not 200 <= response.status_code < 300:
        logger.error("%s returned status %s: %s", provider, response.status_code, response.text)
        raise ProviderError(
            provider, f"backend returned status {response.status_code}: {response.text}"
        )
    try:
        data = response.json()
    except ValueError as exc:
        logger.error("Failed to parse %s response: %s", provider, exc)
        raise ProviderError(provider, "failed to parse backend response", cause=exc) from exc
    if not isinstance(data, dict):
        raise ProviderError(provider, "unexpected response structure from backend")
    return data


class Provider(ABC):
    """Interchangeable AI backend.

    Attributes
    ----------
    name : str
        Registry name of the provider (``"gemini"``, ``"groq"``).
    model : str
        Model used by :meth:`generate_commit_message`.
    """

    name = ""

    def __init__(self, model: str) -> None:
        self.model = model

    @property
    def display_name(self) -> str:
        return f"{self.name.capitalize()} ({self.model})"

    @abstractmethod
    def generate_commit_message(self, status: str, diff: str, custom_instructions: str = "") -> str:
        """Return a commit message for the given status and diff.

        Raises
        ------
        ProviderError
            On transport or backend failure, or an empty response.
        """

    @abstractmethod
    def list_models(self) -> List[str]:
        """Return the ordered list of model names the backend offers."""

    def validate_model(self, model: str) -> None:
        """Raise :class:`~goco.errors.ProviderError` if ``model`` is unavailable.

        Listing errors propagate wrapped with the provider name.
        """
        try:
            models = self.list_models()
        except ProviderError as exc:
            raise ProviderError(self.name, f"failed to list models: {exc.message}", cause=exc) from exc
        if model not in models:
            available = "\n".join(models)
            raise ProviderError(
                self.name,
                f"model {model} not available\nAvailable Models:\n{available}",
            )
