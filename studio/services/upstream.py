"""
Upstream generative capability: the single Gemini operation the dispatcher depends on.

Responsibility: Hide the google-genai client behind one call, generate_content(model,
contents, config). The dispatcher only sees GenerativeBackend, so tests can pass a
fake implementation. No HTTP or FastAPI here.
"""

import logging
from typing import Any, Protocol

from google import genai

from studio.core.config import StudioConfig
from studio.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)


class GenerativeBackend(Protocol):
    """Anything that can generate content given a model id, content parts and options."""

    def generate_content(self, model: str, contents: Any, config: Any = None) -> Any:
        ...


class GeminiBackend:
    """google-genai implementation. One client per instance; build one per request."""

    def __init__(self, config: StudioConfig) -> None:
        if not config.has_credentials:
            raise ServiceUnavailableError(
                "Gemini API key is required. Set GEMINI_API_KEY or GOOGLE_API_KEY."
            )
        self._api_key = config.gemini_api_key
        self._client = None

    def _get_client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def generate_content(self, model: str, contents: Any, config: Any = None) -> Any:
        client = self._get_client()
        logger.info("[upstream:generate_content] IN  model=%s", model)
        response = client.models.generate_content(model=model, contents=contents, config=config)
        logger.info(
            "[upstream:generate_content] OUT model=%s candidates=%d",
            model,
            len(getattr(response, "candidates", None) or []),
        )
        return response
