"""
Groq provider.

Uses Groq's OpenAI compatible chat completions endpoint. Groq's model
catalogue includes speech and guard models, so a curated list of text
generation models is returned instead of the live one.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from goco.errors import ProviderError
from goco.providers.base import Provider, build_prompt, clean_commit_message, request_json


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_MODEL = "llama-3.3-70b-versatile"

# Text generation models, see https://console.groq.com/docs/deprecations
GROQ_MODELS = [
    # Compound systems
    "groq/compound",
    "groq/compound-mini",
    # Production
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
    "mixtral-8x7b-32768",
    "openai/gpt-oss-120b",
    "openai/gpt-oss-20b",
    # Preview, may be deprecated with short notice
    "meta-llama/llama-4-maverick-17b-128e-instruct",
    "meta-llama/llama-4-scout-17b-16e-instruct",
    "moonshotai/kimi-k2-instruct-0905",
    "qwen/qwen3-32b",
]


class GroqProvider(Provider):
    """Provider backed by Groq.

    An empty ``api_key`` is accepted so that models can be listed without
    credentials; generating then fails with :class:`ProviderError`.
    """

    name = "groq"
    BASE_URL = "https://api.groq.com/openai/v1"

    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
    ) -> None:
        super().__init__(model)
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def list_models(self) -> List[str]:
        return list(GROQ_MODELS)

    def generate_commit_message(self, status: str, diff: str, custom_instructions: str = "") -> str:
        if not self.api_key:
            raise ProviderError(self.name, "an API key is required to generate messages")
        payload = {
            "model": self.model,
            "messages": [
                {"role": "user", "content": build_prompt(status, diff, custom_instructions)},
            ],
        }
        data = request_json(
            self.session, "POST", f"{self.base_url}/chat/completions", self.name, json=payload
        )

        choices = data.get("choices") or []
        if not choices:
            raise ProviderError(self.name, "no response from Groq API")
        content = (choices[0].get("message") or {}).get("content") or ""
        message = clean_commit_message(content)
        if not message:
            raise ProviderError(self.name, "Groq API returned an empty message")
        return message
