"""
API handlers: decode the request body, call the dispatcher, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import json
import logging
from typing import Any, Callable

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler as default_http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from studio.core.config import (
    ERR_INVALID_ACTION,
    ERR_INVALID_PAYLOAD,
    ERR_METHOD_NOT_ALLOWED,
    ERR_UPSTREAM_FAILED,
    PROXY_PATH,
    StudioConfig,
)
from studio.core.errors import InvalidActionError, InvalidPayloadError
from studio.schemas.actions import ErrorResponse
from studio.services.dispatcher import dispatch, parse_envelope
from studio.services.upstream import GenerativeBackend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[StudioConfig], GenerativeBackend]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def decode_body(raw: bytes) -> Any:
    """Parse the raw request body as JSON. Returns None when it is empty or not JSON."""
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError):
        return None


def handle_action(body: Any, config: StudioConfig, backend_factory: BackendFactory) -> JSONResponse:
    """
    Validate the envelope, dispatch it, and return the normalized JSON result.
    400 on an invalid action or payload (no upstream call), 500 with a generic message
    on any upstream or reshaping failure. Upstream detail is logged, never returned.
    """
    try:
        action, payload = parse_envelope(body)
    except InvalidActionError as e:
        logger.info("[api:handle_action] rejected action=%r", e.action)
        return error_response(400, ERR_INVALID_ACTION)
    except InvalidPayloadError as e:
        logger.info("[api:handle_action] rejected payload: %s", e)
        return error_response(400, ERR_INVALID_PAYLOAD)

    try:
        backend = backend_factory(config)
        result = dispatch(action, payload, backend)
    except Exception:
        logger.exception("Gemini request failed for action=%s", action.value)
        return error_response(500, ERR_UPSTREAM_FAILED)
    return JSONResponse(content=result)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Keep the {error} body for method mismatches on the proxy path; defer to FastAPI elsewhere."""
    if exc.status_code == 405 and request.url.path == PROXY_PATH:
        return error_response(405, ERR_METHOD_NOT_ALLOWED)
    return await default_http_exception_handler(request, exc)
