# poe_gateway/features/proxy_chat/handler.py
from typing import Any, AsyncGenerator, Dict

import httpx
from fastapi import Depends
from fastapi.responses import Response, StreamingResponse
from pydantic import ValidationError

from poe_gateway.dependencies import get_model_mapping, get_upstream_client
from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.services.upstream_client import UpstreamClient
from poe_gateway.shared.config import logger
from poe_gateway.shared.constants import CORS_HEADERS, SSE_HEADERS
from poe_gateway.shared.errors import err_invalid_json

from .command import ProxyChatRequest


async def relay_stream(upstream_resp: httpx.Response) -> AsyncGenerator[bytes, None]:
    """Yields upstream bytes as they arrive and closes the upstream response at the end."""
    try:
        async for chunk in upstream_resp.aiter_bytes():
            yield chunk
    except httpx.HTTPError as err:
        logger.error("Upstream stream interrupted: %s", err)
    finally:
        await upstream_resp.aclose()


class ProxyChatHandler:
    def __init__(
        self,
        mapping: ModelMappingTable = Depends(get_model_mapping),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        self._mapping = mapping
        self._upstream = upstream

    def build_payload(self, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            request = ProxyChatRequest.model_validate(body)
        except ValidationError as e:
            raise err_invalid_json(f"Invalid chat completion request: {e.errors()[0]['msg']}") from e

        mapped_model = None
        if request.model:
            mapped_model = self._mapping.resolve(request.model)
            logger.info("Model mapping: %s -> %s", request.model, mapped_model)
        return request.to_upstream(mapped_model)

    async def handle(self, body: Dict[str, Any], token: str) -> Response:
        payload = self.build_payload(body)

        if payload.get("stream") is True:
            upstream_resp = await self._upstream.open_stream(payload, token)
            return StreamingResponse(
                relay_stream(upstream_resp),
                status_code=upstream_resp.status_code,
                media_type="text/event-stream",
                headers=SSE_HEADERS,
            )

        upstream_resp = await self._upstream.send(payload, token)
        return Response(
            content=upstream_resp.content,
            status_code=upstream_resp.status_code,
            media_type="application/json",
            headers=CORS_HEADERS,
        )
