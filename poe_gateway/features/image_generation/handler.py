# poe_gateway/features/image_generation/handler.py
import json
import time
from typing import Any, Dict, Optional

import httpx
from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from poe_gateway.dependencies import get_model_mapping, get_upstream_client
from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.services.upstream_client import UpstreamClient
from poe_gateway.shared.config import logger
from poe_gateway.shared.constants import CORS_HEADERS, IMAGE_MODEL, SUPPORTED_IMAGE_SIZE
from poe_gateway.shared.errors import (
    err_invalid_json,
    err_invalid_size,
    err_unsupported_image_model,
    err_upstream,
)
from poe_gateway.shared.metrics import IMAGES_GENERATED

from .command import ImageGenerationRequest
from .query import GeneratedImage, ImageGenerationResponse
from .reply_parser import parse_image_reply


def upstream_error_message(upstream_resp: httpx.Response) -> Optional[str]:
    """Pulls a human-readable message out of an upstream error body, if any."""
    try:
        data = upstream_resp.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    if isinstance(data.get("message"), str):
        return data["message"]
    return None


def reply_content(upstream_resp: httpx.Response) -> str:
    """Returns ``choices[0].message.content`` or '' when the body has no such text."""
    try:
        content = upstream_resp.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning("Upstream image reply has no message content: %s", e)
        return ""
    return content if isinstance(content, str) else ""


class ImageGenerationHandler:
    def __init__(
        self,
        mapping: ModelMappingTable = Depends(get_model_mapping),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        self._mapping = mapping
        self._upstream = upstream

    def validate(self, body: Dict[str, Any]) -> ImageGenerationRequest:
        try:
            request = ImageGenerationRequest.model_validate(body)
        except ValidationError as e:
            raise err_invalid_json(f"Invalid image generation request: {e.errors()[0]['msg']}") from e

        upstream_model = self._mapping.resolve(IMAGE_MODEL)
        if request.model is not None and request.model not in (IMAGE_MODEL, upstream_model):
            raise err_unsupported_image_model(request.model)
        if request.size is not None and request.size != SUPPORTED_IMAGE_SIZE:
            raise err_invalid_size(request.size)
        return request

    async def handle(self, body: Dict[str, Any], token: str) -> JSONResponse:
        request = self.validate(body)
        payload = request.to_chat_payload(self._mapping.resolve(IMAGE_MODEL))
        logger.debug("Synthesized chat request: %s", json.dumps(payload, ensure_ascii=False))

        upstream_resp = await self._upstream.send(payload, token, endpoint="images")
        if not upstream_resp.is_success:
            logger.error("Upstream API error (%s): %s", upstream_resp.status_code, upstream_resp.text)
            raise err_upstream(upstream_resp.status_code, upstream_error_message(upstream_resp))

        reply = parse_image_reply(reply_content(upstream_resp))
        if not reply.url:
            logger.warning("No image URL found in upstream reply")
        logger.info("Extracted image URL: %s", reply.url)
        logger.info("Extracted caption: %s", reply.caption)
        IMAGES_GENERATED.inc()

        response = ImageGenerationResponse(
            created=int(time.time()),
            data=[GeneratedImage(url=reply.url, revised_prompt=reply.caption)],
        )
        return JSONResponse(content=response.model_dump(), headers=CORS_HEADERS)
