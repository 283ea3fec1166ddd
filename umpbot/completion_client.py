import logging

import requests

from .constants import (
    DEFAULT_GEMINI_API_BASE_URL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GEMINI_TIMEOUT_SECONDS,
)
from .errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


def extract_answer_text(data):
    """Returns the first candidate's first text part, or "" if there is none."""
    try:
        return data["candidates"][0]["content"]["parts"][0].get("text") or ""
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""


class CompletionClient:
    """A client for the Gemini generateContent API."""

    def __init__(self, api_key: str, model: str = DEFAULT_GEMINI_MODEL,
                 base_url: str = DEFAULT_GEMINI_API_BASE_URL,
                 timeout: float = DEFAULT_GEMINI_TIMEOUT_SECONDS):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "CompletionClient":
        return cls(
            api_key=config.get("GEMINI_API_KEY", ""),
            model=config.get("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            base_url=config.get("GEMINI_API_BASE_URL") or DEFAULT_GEMINI_API_BASE_URL,
            timeout=config.get("GEMINI_TIMEOUT_SECONDS") or DEFAULT_GEMINI_TIMEOUT_SECONDS,
        )

    def generate(self, prompt: str) -> str:
        """Sends a prompt and returns the answer text.

        The call is made once; failures are raised, not retried.
        """
        if not self.api_key:
            raise ConfigurationError("Missing GEMINI_API_KEY.")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        response = requests.post(
            url,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout,
        )

        if not response.ok:
            logger.error("Completion request failed with status %s", response.status_code)
            raise UpstreamError(response.status_code, response.text)

        return extract_answer_text(response.json())
