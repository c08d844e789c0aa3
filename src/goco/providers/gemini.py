"""
Google Gemini provider.

Talks to the Gemini REST API (``generativelanguage.googleapis.com``).
The model list is fetched live and narrowed to ``gemini-*`` names.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from goco.errors import ProviderError
from goco.providers.base import Provider, build_prompt, clean_commit_message, request_json


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_MODEL = "gemini-2.5-flash"
MODEL_PREFIX = "gemini-"


def filter_model_names(names: List[str]) -> List[str]:
    """Keep the ``gemini-`` models, or every model if none match.

    The result is never empty when ``names`` is not.
    """
    filtered = [name for name in names if name.startswith(MODEL_PREFIX)]
    if not filtered:
        return list(names)
    return filtered


class GeminiProvider(Provider):
    """Provider backed by Google Gemini.

    Parameters
    ----------
    api_key : str
        Gemini API key.
    model : str, optional
        Model to generate with. Defaults to :data:`DEFAULT_MODEL`.
    session : requests.Session, optional
        HTTP session to use; a new one is created when omitted.
    base_url : str, optional
        API root, mainly for testing.
    """

    name = "gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    PAGE_SIZE = 1000

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
    ) -> None:
        super().__init__(model)
        if not api_key:
            raise ProviderError(self.name, "an API key is required")
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"x-goog-api-key": api_key})

    def _fetch_model_names(self) -> List[str]:
        names: List[str] = []
        params: Dict[str, Any] = {"pageSize": self.PAGE_SIZE}
        while True:
            data = request_json(
                self.session, "GET", f"{self.base_url}/models", self.name, params=params
            )
            for item in data.get("models", []):
                name = item.get("name", "")
                if name.startswith("models/"):
                    name = name[len("models/"):]
                if name:
                    names.append(name)
            token = data.get("nextPageToken")
            if not token:
                return names
            params = {"pageSize": self.PAGE_SIZE, "pageToken": token}

    def list_models(self) -> List[str]:
        names = self._fetch_model_names()
        logger.debug("Gemini returned %d models", len(names))
        return filter_model_names(names)

    def generate_commit_message(self, status: str, diff: str, custom_instructions: str = "") -> str:
        prompt = build_prompt(status, diff, custom_instructions)
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        url = f"{self.base_url}/models/{self.model}:generateContent"
        data = request_json(self.session, "POST", url, self.name, json=payload)

        candidates = data.get("candidates") or []
        if not candidates:
            raise ProviderError(self.name, "no response from Gemini API")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        message = clean_commit_message(text)
        if not message:
            raise ProviderError(self.name, "Gemini API returned an empty message")
        return message
