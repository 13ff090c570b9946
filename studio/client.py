"""
Client invoker: one function per proxy action, hiding the {action, payload} envelope.

Each call is a single blocking POST to the proxy. Arguments are not validated here
(callers check them first), nothing is retried, and no timeout is set, so a hang
upstream hangs the caller.
"""

import base64
import logging
from typing import Any

import requests

from studio.core.config import API_BASE, PROXY_PATH
from studio.schemas.actions import ActionTag

logger = logging.getLogger(__name__)


class GeminiProxyError(Exception):
    """Raised when the proxy answers with a non-success status or cannot be reached."""


def call_gemini(
    action: ActionTag | str,
    payload: dict[str, Any],
    base_url: str | None = None,
    session: requests.Session | None = None,
) -> Any:
    """POST {action, payload} to the proxy and return the parsed JSON body."""
    tag = action.value if isinstance(action, ActionTag) else action
    url = f"{(base_url or API_BASE).rstrip('/')}{PROXY_PATH}"
    http = session or requests
    try:
        r = http.post(
            url,
            json={"action": tag, "payload": payload},
            headers={"Content-Type": "application/json"},
        )
    except requests.RequestException as e:
        logger.warning("[client:call_gemini] action=%s request failed: %s", tag, e)
        raise GeminiProxyError("Gemini API failed") from e
    if not r.ok:
        logger.warning("[client:call_gemini] action=%s status=%s", tag, r.status_code)
        raise GeminiProxyError("Gemini API failed")
    return r.json()


def get_quick_summary(topic: str, **kwargs) -> Any:
    return call_gemini(ActionTag.QUICK_SUMMARY, {"topic": topic}, **kwargs)


def chat_with_ngo_assistant(message: str, **kwargs) -> Any:
    return call_gemini(ActionTag.CHAT, {"message": message}, **kwargs)


def search_charity_trends(query: str, **kwargs) -> Any:
    return call_gemini(ActionTag.SEARCH, {"query": query}, **kwargs)


def find_nearby_charities(lat: float, lng: float, **kwargs) -> Any:
    return call_gemini(ActionTag.NEARBY_CHARITIES, {"lat": lat, "lng": lng}, **kwargs)


def generate_campaign_poster(prompt: str, size: str, **kwargs) -> Any:
    return call_gemini(ActionTag.GENERATE_POSTER, {"prompt": prompt, "size": size}, **kwargs)


def edit_impact_photo(image_data_uri: str, instruction: str, **kwargs) -> Any:
    return call_gemini(ActionTag.EDIT_IMAGE, {"base64": image_data_uri, "instruction": instruction}, **kwargs)


def analyze_field_photo(image_data_uri: str, **kwargs) -> Any:
    return call_gemini(ActionTag.ANALYZE_IMAGE, {"base64": image_data_uri}, **kwargs)


def to_data_uri(data: bytes, mime_type: str | None = None) -> str:
    """Encode raw file bytes as a data-URI, the form the image actions expect."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"
