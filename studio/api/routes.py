"""
API route aggregator: register endpoints; no logic, only delegate to handlers.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from studio.api.handlers import BackendFactory, decode_body, handle_action
from studio.core.config import PROXY_PATH, StudioConfig, load_config
from studio.services.dispatcher import describe_actions
from studio.services.upstream import GeminiBackend

logger = logging.getLogger(__name__)
router = APIRouter()


def get_config() -> StudioConfig:
    """Read the upstream credential at request time."""
    return load_config()


def get_backend_factory() -> BackendFactory:
    """Each request builds its own Gemini client from the config."""
    return GeminiBackend


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "AI Studio proxy running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Proxy ---

@router.get(
    f"{PROXY_PATH}/actions",
    tags=["proxy"],
    summary="List supported actions",
    description="Action tags accepted by POST /api/gemini and the payload fields each one requires.",
)
def list_actions() -> dict:
    return {"actions": describe_actions()}


@router.post(
    PROXY_PATH,
    tags=["proxy"],
    summary="Run one Gemini action",
    description=(
        "Body: {action, payload}. Returns {text}, {text, sources}, {text, places} or {image} "
        "depending on the action. 405 for non-POST, 400 for an invalid action or payload, "
        "500 when the Gemini call fails."
    ),
)
async def gemini_proxy(
    request: Request,
    config: StudioConfig = Depends(get_config),
    backend_factory: BackendFactory = Depends(get_backend_factory),
) -> JSONResponse:
    body = decode_body(await request.body())
    logger.info("[api:gemini_proxy] IN  action=%r", body.get("action") if isinstance(body, dict) else None)
    # The upstream SDK call blocks; keep it off the event loop.
    return await run_in_threadpool(handle_action, body, config, backend_factory)
