"""
Client for the upstream chat-completions API.
The caller's bearer token is passed through unchanged; the gateway holds no credentials.
"""

import httpx
from typing import Dict, Any

from poe_gateway.shared.config import logger
from poe_gateway.shared.errors import err_network
from poe_gateway.shared.metrics import UPSTREAM_FAILURES, UPSTREAM_REQUESTS
from poe_gateway.shared.utils import mask_key


class UpstreamClient:
    """Sends chat-completion payloads to the single upstream endpoint. No retries."""

    def __init__(self, http_client: httpx.AsyncClient, url: str):
        self._client = http_client
        self._url = url

    def _build_request(self, payload: Dict[str, Any], token: str) -> httpx.Request:
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        return self._client.build_request("POST", self._url, json=payload, headers=headers)

    async def _send(
        self, payload: Dict[str, Any], token: str, endpoint: str, stream: bool
    ) -> httpx.Response:
        logger.info(
            "Forwarding %s request for model '%s' (stream: %s, token: %s)",
            endpoint, payload.get("model"), stream, mask_key(token),
        )
        try:
            response = await self._client.send(self._build_request(payload, token), stream=stream)
        except httpx.RequestError as e:
            UPSTREAM_FAILURES.labels(endpoint=endpoint).inc()
            logger.error("Network error contacting upstream %s: %s", self._url, e)
            raise err_network() from e

        UPSTREAM_REQUESTS.labels(endpoint=endpoint, status=str(response.status_code)).inc()
        if response.status_code >= 400:
            logger.warning("Upstream returned %s for %s request", response.status_code, endpoint)
        return response

    async def send(self, payload: Dict[str, Any], token: str, endpoint: str = "chat") -> httpx.Response:
        """Sends a request and buffers the whole upstream response."""
        return await self._send(payload, token, endpoint, stream=False)

    async def open_stream(self, payload: Dict[str, Any], token: str, endpoint: str = "chat") -> httpx.Response:
        """
        Sends a request and returns as soon as the upstream headers arrive.
        The body is left unread; the caller owns closing the response.
        """
        return await self._send(payload, token, endpoint, stream=True)
