"""
Response reshaping: pull text, citations, places and inline images out of Gemini responses,
and turn data-URIs from the browser into raw image bytes.

Reads SDK objects by attribute with None-tolerant access, so a partial response
(no candidates, no grounding metadata, no content) reshapes to empty values.
"""

import base64
import binascii

from studio.core.config import OUTPUT_IMAGE_MIME


def _first_candidate(response):
    candidates = getattr(response, "candidates", None) or []
    return candidates[0] if candidates else None


def _grounding_chunks(response) -> list:
    candidate = _first_candidate(response)
    if candidate is None:
        return []
    metadata = getattr(candidate, "grounding_metadata", None)
    if metadata is None:
        return []
    return list(getattr(metadata, "grounding_chunks", None) or [])


def extract_text(response) -> str:
    """Response text, or "" when the model returned none."""
    return getattr(response, "text", None) or ""


def extract_web_sources(response) -> list[dict]:
    """Web citations from the first candidate's grounding chunks: [{title, uri}]."""
    sources = []
    for chunk in _grounding_chunks(response):
        web = getattr(chunk, "web", None)
        if not web:
            continue
        sources.append({"title": getattr(web, "title", None), "uri": getattr(web, "uri", None)})
    return sources


def extract_places(response) -> list[dict]:
    """Map places from the first candidate's grounding chunks: [{title, uri}]."""
    places = []
    for chunk in _grounding_chunks(response):
        maps = getattr(chunk, "maps", None)
        if not maps:
            continue
        places.append({"title": getattr(maps, "title", None), "uri": getattr(maps, "uri", None)})
    return places


def extract_image_data_uri(response) -> str | None:
    """
    First inline-data part of the first candidate, as a data-URI.
    Returns None when there is no such part (soft absence, not an error).
    """
    candidate = _first_candidate(response)
    content = getattr(candidate, "content", None) if candidate is not None else None
    parts = getattr(content, "parts", None) if content is not None else None
    if not parts:
        return None
    for part in parts:
        inline = getattr(part, "inline_data", None)
        data = getattr(inline, "data", None) if inline is not None else None
        if not data:
            continue
        if isinstance(data, str):
            encoded = data
        else:
            encoded = base64.b64encode(data).decode("ascii")
        mime_type = getattr(inline, "mime_type", None) or OUTPUT_IMAGE_MIME
        return f"data:{mime_type};base64,{encoded}"
    return None


def strip_data_uri(value: str) -> str:
    """Drop everything up to and including the first comma (data:image/jpeg;base64,...)."""
    _, sep, rest = value.partition(",")
    return rest if sep else value


def decode_data_uri(value: str) -> bytes:
    """Raw bytes of a data-URI (or bare base64). Raises ValueError if not valid base64."""
    try:
        return base64.b64decode(strip_data_uri(value), validate=True)
    except binascii.Error as e:
        raise ValueError("Image is not valid base64") from e
