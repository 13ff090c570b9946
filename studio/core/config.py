"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. The upstream credential is read into a StudioConfig value that is
handed to the API layer per request, so nothing else reads the environment.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

# Proxy endpoint (single path for every action)
PROXY_PATH: str = "/api/gemini"

# Backend base URL used by the client invoker and the Streamlit UI
API_BASE: str = os.getenv("API_BASE", "http://localhost:8000").strip() or "http://localhost:8000"

# Role shown to the UI's presentational gate (not a security boundary)
STUDIO_USER_ROLE: str = os.getenv("STUDIO_USER_ROLE", "admin").strip().lower()
ADMIN_ROLE: str = "admin"

# Gemini models, one per action
QUICK_SUMMARY_MODEL: str = "gemini-flash-lite-latest"
CHAT_MODEL: str = "gemini-3-pro-preview"
SEARCH_MODEL: str = "gemini-3-flash-preview"
MAPS_MODEL: str = "gemini-2.5-flash"
POSTER_MODEL: str = "gemini-3-pro-image-preview"
EDIT_IMAGE_MODEL: str = "gemini-2.5-flash-image"
ANALYZE_IMAGE_MODEL: str = "gemini-3-pro-preview"

# Prompts
CHAT_SYSTEM_INSTRUCTION: str = 'You are a helpful NGO assistant for "NGO Nexus".'
QUICK_SUMMARY_PROMPT: str = "Provide a 2-sentence quick summary of: {topic}"
NEARBY_CHARITIES_PROMPT: str = "List 5 highly-rated charity organizations near {lat}, {lng}."
POSTER_PROMPT: str = "A professional NGO campaign poster: {prompt}"
ANALYZE_IMAGE_PROMPT: str = "Analyze this field photo and report visible needs or project status."
DEFAULT_EDIT_INSTRUCTION: str = "Make this look more professional"

# Images
POSTER_ASPECT_RATIO: str = "3:4"
POSTER_SIZES: tuple[str, ...] = ("1K", "2K", "4K")
INPUT_IMAGE_MIME: str = "image/jpeg"
OUTPUT_IMAGE_MIME: str = "image/png"

# Error messages returned to callers (never upstream detail)
ERR_METHOD_NOT_ALLOWED: str = "Method not allowed"
ERR_INVALID_ACTION: str = "Invalid action"
ERR_INVALID_PAYLOAD: str = "Invalid payload"
ERR_UPSTREAM_FAILED: str = "Gemini request failed"


@dataclass(frozen=True)
class StudioConfig:
    """Per-process settings injected into request handling."""

    gemini_api_key: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.gemini_api_key)


def resolve_api_key(explicit: str | None, *env_names: str) -> str:
    """Return the explicit key if non-empty, else the first non-empty env var (stripped)."""
    if explicit and explicit.strip():
        return explicit.strip()
    for name in env_names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


def load_config(api_key: str | None = None) -> StudioConfig:
    """Build StudioConfig from GEMINI_API_KEY, falling back to GOOGLE_API_KEY."""
    return StudioConfig(gemini_api_key=resolve_api_key(api_key, "GEMINI_API_KEY", "GOOGLE_API_KEY"))
