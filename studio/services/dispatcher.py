"""
Action dispatch: map an action tag to exactly one upstream Gemini call and reshape its result.

Responsibility: Validate the envelope, pick the handler from a fixed table, build the
model id / contents / config for that action, call the backend once, and return the
normalized result dict. Called by the API layer; no HTTP or FastAPI here.
"""

import logging
from typing import Any, Callable

from google.genai import types
from pydantic import BaseModel, ValidationError

from studio.core.config import (
    ANALYZE_IMAGE_MODEL,
    ANALYZE_IMAGE_PROMPT,
    CHAT_MODEL,
    CHAT_SYSTEM_INSTRUCTION,
    EDIT_IMAGE_MODEL,
    INPUT_IMAGE_MIME,
    MAPS_MODEL,
    NEARBY_CHARITIES_PROMPT,
    POSTER_ASPECT_RATIO,
    POSTER_MODEL,
    POSTER_PROMPT,
    QUICK_SUMMARY_MODEL,
    QUICK_SUMMARY_PROMPT,
    SEARCH_MODEL,
)
from studio.core.errors import InvalidActionError, InvalidPayloadError
from studio.schemas.actions import (
    PAYLOAD_MODELS,
    RESULT_MODELS,
    ActionTag,
    AnalyzeImagePayload,
    ChatPayload,
    EditImagePayload,
    GeneratePosterPayload,
    NearbyCharitiesPayload,
    QuickSummaryPayload,
    SearchPayload,
)
from studio.services.extraction import (
    decode_data_uri,
    extract_image_data_uri,
    extract_places,
    extract_text,
    extract_web_sources,
)
from studio.services.upstream import GenerativeBackend

logger = logging.getLogger(__name__)


def parse_envelope(body: Any) -> tuple[ActionTag, BaseModel]:
    """
    Validate {action, payload} and return (tag, typed payload).
    Raises InvalidActionError for a missing/unknown action, InvalidPayloadError for a bad payload.
    """
    if not isinstance(body, dict):
        raise InvalidPayloadError("<body>", "request body must be a JSON object")
    raw_action = body.get("action")
    try:
        action = ActionTag(raw_action)
    except (ValueError, TypeError) as e:
        raise InvalidActionError(raw_action) from e
    payload = body.get("payload")
    if not isinstance(payload, dict):
        raise InvalidPayloadError(action.value, "payload must be a JSON object")
    try:
        model = PAYLOAD_MODELS[action].model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise InvalidPayloadError(action.value, f"bad fields: {', '.join(fields)}") from e
    return action, model


def _image_part(data_uri: str) -> types.Part:
    # Payload validation already checked that the data-URI decodes.
    return types.Part.from_bytes(data=decode_data_uri(data_uri), mime_type=INPUT_IMAGE_MIME)


# --- Handlers: one upstream call each ---


def _quick_summary(backend: GenerativeBackend, payload: QuickSummaryPayload) -> dict[str, Any]:
    response = backend.generate_content(
        model=QUICK_SUMMARY_MODEL,
        contents=QUICK_SUMMARY_PROMPT.format(topic=payload.topic),
    )
    return {"text": extract_text(response)}


def _chat(backend: GenerativeBackend, payload: ChatPayload) -> dict[str, Any]:
    # A fresh single-turn session is one generate call scoped by the system instruction.
    response = backend.generate_content(
        model=CHAT_MODEL,
        contents=payload.message,
        config=types.GenerateContentConfig(system_instruction=CHAT_SYSTEM_INSTRUCTION),
    )
    return {"text": extract_text(response)}


def _search(backend: GenerativeBackend, payload: SearchPayload) -> dict[str, Any]:
    response = backend.generate_content(
        model=SEARCH_MODEL,
        contents=payload.query,
        config=types.GenerateContentConfig(tools=[types.Tool(google_search=types.GoogleSearch())]),
    )
    return {"text": extract_text(response), "sources": extract_web_sources(response)}


def _nearby_charities(backend: GenerativeBackend, payload: NearbyCharitiesPayload) -> dict[str, Any]:
    response = backend.generate_content(
        model=MAPS_MODEL,
        contents=NEARBY_CHARITIES_PROMPT.format(lat=payload.lat, lng=payload.lng),
        config=types.GenerateContentConfig(
            tools=[types.Tool(google_maps=types.GoogleMaps())],
            tool_config=types.ToolConfig(
                retrieval_config=types.RetrievalConfig(
                    lat_lng=types.LatLng(latitude=payload.lat, longitude=payload.lng),
                ),
            ),
        ),
    )
    return {"text": extract_text(response), "places": extract_places(response)}


def _generate_poster(backend: GenerativeBackend, payload: GeneratePosterPayload) -> dict[str, Any]:
    response = backend.generate_content(
        model=POSTER_MODEL,
        contents=[types.Part.from_text(text=POSTER_PROMPT.format(prompt=payload.prompt))],
        config=types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=POSTER_ASPECT_RATIO, image_size=payload.size),
        ),
    )
    return {"image": extract_image_data_uri(response)}


def _edit_image(backend: GenerativeBackend, payload: EditImagePayload) -> dict[str, Any]:
    image = _image_part(payload.base64)
    response = backend.generate_content(
        model=EDIT_IMAGE_MODEL,
        contents=[image, types.Part.from_text(text=payload.instruction)],
    )
    return {"image": extract_image_data_uri(response)}


def _analyze_image(backend: GenerativeBackend, payload: AnalyzeImagePayload) -> dict[str, Any]:
    image = _image_part(payload.base64)
    response = backend.generate_content(
        model=ANALYZE_IMAGE_MODEL,
        contents=[image, types.Part.from_text(text=ANALYZE_IMAGE_PROMPT)],
    )
    return {"text": extract_text(response)}


ACTION_HANDLERS: dict[ActionTag, Callable[[GenerativeBackend, Any], dict[str, Any]]] = {
    ActionTag.QUICK_SUMMARY: _quick_summary,
    ActionTag.CHAT: _chat,
    ActionTag.SEARCH: _search,
    ActionTag.NEARBY_CHARITIES: _nearby_charities,
    ActionTag.GENERATE_POSTER: _generate_poster,
    ActionTag.EDIT_IMAGE: _edit_image,
    ActionTag.ANALYZE_IMAGE: _analyze_image,
}


def dispatch(action: ActionTag, payload: BaseModel, backend: GenerativeBackend) -> dict[str, Any]:
    """
    Run the handler for an already-validated action and check the result against its model.
    Upstream and reshaping errors propagate to the caller.
    """
    logger.info("[dispatcher:dispatch] IN  action=%s", action.value)
    raw = ACTION_HANDLERS[action](backend, payload)
    result = RESULT_MODELS[action].model_validate(raw).model_dump()
    logger.info("[dispatcher:dispatch] OUT action=%s keys=%s", action.value, sorted(result))
    return result


def describe_actions() -> list[dict[str, Any]]:
    """Action tags with their required payload fields, for discovery."""
    return [
        {"action": tag.value, "payload": sorted(PAYLOAD_MODELS[tag].model_fields)}
        for tag in ActionTag
    ]
