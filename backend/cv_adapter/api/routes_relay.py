"""
Same-origin relay to the provider APIs for browser clients.

The browser sends its own credential headers; the relay checks they are
present, forwards the body unchanged and returns the upstream status and body
verbatim.
"""
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse, Response

from .. import config as settings
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["relay"])


async def _forward(url: str, body: bytes, headers: dict) -> Response:
    try:
        async with httpx.AsyncClient(timeout=settings.provider_timeout()) as client:
            resp = await client.post(url, content=body, headers=headers)
    except (httpx.HTTPError, ConfigurationError) as e:
        message = str(e) or "upstream request failed"
        logger.error("Relay to %s failed: %s", url, message)
        return JSONResponse(status_code=500, content={"error": message})
    return Response(
        content=resp.content,
        status_code=resp.status_code,
        media_type=resp.headers.get("content-type", "application/json"),
    )


@router.post("/anthropic/v1/messages")
async def relay_anthropic(
    request: Request,
    x_api_key: Optional[str] = Header(None),
    anthropic_version: Optional[str] = Header(None),
):
    if not x_api_key:
        return JSONResponse(status_code=401, content={"error": "API key is required"})

    headers = {
        "x-api-key": x_api_key,
        "anthropic-version": anthropic_version or settings.ANTHROPIC_VERSION,
        "Content-Type": "application/json",
    }
    return await _forward(f"{settings.ANTHROPIC_BASE_URL}/messages", await request.body(), headers)


@router.post("/openai/v1/chat/completions")
async def relay_openai(request: Request, authorization: Optional[str] = Header(None)):
    if not authorization or not authorization.startswith("Bearer "):
        return JSONResponse(status_code=401, content={"error": "Authorization header with Bearer token is required"})

    headers = {"Authorization": authorization, "Content-Type": "application/json"}
    return await _forward(f"{settings.OPENAI_BASE_URL}/chat/completions", await request.body(), headers)
