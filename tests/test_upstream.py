"""
Tests for the Gemini backend wrapper. google.genai.Client is patched; no network.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from studio.core.config import StudioConfig
from studio.core.errors import ServiceUnavailableError
from studio.services.upstream import GeminiBackend


def test_missing_key_raises_service_unavailable() -> None:
    with pytest.raises(ServiceUnavailableError):
        GeminiBackend(StudioConfig(gemini_api_key=""))


def test_generate_content_forwards_to_sdk() -> None:
    sdk_client = MagicMock()
    sdk_client.models.generate_content.return_value = SimpleNamespace(text="ok", candidates=[])
    with patch("google.genai.Client", return_value=sdk_client) as mock_cls:
        backend = GeminiBackend(StudioConfig(gemini_api_key="k"))
        response = backend.generate_content(model="m", contents="hello", config=None)
    assert response.text == "ok"
    mock_cls.assert_called_once_with(api_key="k")
    sdk_client.models.generate_content.assert_called_once_with(model="m", contents="hello", config=None)
