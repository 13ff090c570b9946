"""Schemas for the proxy endpoint: action tags, per-action payloads and normalized results."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from studio.services.extraction import decode_data_uri


class ActionTag(str, Enum):
    """Closed set of actions the proxy dispatches."""

    QUICK_SUMMARY = "quickSummary"
    CHAT = "chat"
    SEARCH = "search"
    NEARBY_CHARITIES = "nearbyCharities"
    GENERATE_POSTER = "generatePoster"
    EDIT_IMAGE = "editImage"
    ANALYZE_IMAGE = "analyzeImage"


# --- Payloads ---


class QuickSummaryPayload(BaseModel):
    topic: str = Field(..., description="Topic to summarize in two sentences.")


class ChatPayload(BaseModel):
    message: str = Field(..., description="Single user message for the NGO assistant.")


class SearchPayload(BaseModel):
    query: str = Field(..., description="Search query answered with Google Search grounding.")


class NearbyCharitiesPayload(BaseModel):
    # Kept as sent: 1 renders as "1" in the prompt.
    lat: int | float = Field(..., description="Latitude of the caller.")
    lng: int | float = Field(..., description="Longitude of the caller.")


class GeneratePosterPayload(BaseModel):
    prompt: str = Field(..., description="Poster description.")
    size: Literal["1K", "2K", "4K"] = Field(..., description="Output image size.")


class ImagePayload(BaseModel):
    """Base for actions that carry an input image. The data-URI must decode before any upstream work."""

    base64: str = Field(..., description="Input image as a data-URI (data:image/jpeg;base64,...).")

    @field_validator("base64")
    @classmethod
    def check_decodes(cls, value: str) -> str:
        decode_data_uri(value)
        return value


class EditImagePayload(ImagePayload):
    instruction: str = Field(..., description="Edit instruction.")


class AnalyzeImagePayload(ImagePayload):
    pass


PAYLOAD_MODELS: dict[ActionTag, type[BaseModel]] = {
    ActionTag.QUICK_SUMMARY: QuickSummaryPayload,
    ActionTag.CHAT: ChatPayload,
    ActionTag.SEARCH: SearchPayload,
    ActionTag.NEARBY_CHARITIES: NearbyCharitiesPayload,
    ActionTag.GENERATE_POSTER: GeneratePosterPayload,
    ActionTag.EDIT_IMAGE: EditImagePayload,
    ActionTag.ANALYZE_IMAGE: AnalyzeImagePayload,
}


# --- Results ---


class WebSource(BaseModel):
    """Citation from search grounding metadata."""

    title: str | None = None
    uri: str | None = None


class Place(BaseModel):
    """Place from maps grounding metadata."""

    title: str | None = None
    uri: str | None = None


class TextResult(BaseModel):
    text: str = Field(..., description="Generated text; empty when the model returned none.")


class SearchResult(BaseModel):
    text: str = Field(..., description="Grounded answer.")
    sources: list[WebSource] = Field(default_factory=list, description="Web citations; [] when ungrounded.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "text": "Several organizations led relief efforts...",
                    "sources": [{"title": "example.org", "uri": "https://example.org/relief"}],
                }
            ]
        }
    }


class PlacesResult(BaseModel):
    text: str = Field(..., description="Grounded answer.")
    places: list[Place] = Field(default_factory=list, description="Map places; [] when ungrounded.")


class ImageResult(BaseModel):
    image: str | None = Field(..., description="data:<mime>;base64,... or null when no image part was produced.")


class ErrorResponse(BaseModel):
    error: str


RESULT_MODELS: dict[ActionTag, type[BaseModel]] = {
    ActionTag.QUICK_SUMMARY: TextResult,
    ActionTag.CHAT: TextResult,
    ActionTag.SEARCH: SearchResult,
    ActionTag.NEARBY_CHARITIES: PlacesResult,
    ActionTag.GENERATE_POSTER: ImageResult,
    ActionTag.EDIT_IMAGE: ImageResult,
    ActionTag.ANALYZE_IMAGE: TextResult,
}
