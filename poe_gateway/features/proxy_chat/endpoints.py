from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from poe_gateway.dependencies import read_json_body, require_bearer_token
from .handler import ProxyChatHandler

router = APIRouter()

@router.post("/chat/completions", response_model=None)
async def proxy_chat(
    token: str = Depends(require_bearer_token),
    body: Dict[str, Any] = Depends(read_json_body),
    handler: ProxyChatHandler = Depends(ProxyChatHandler),
) -> Response:
    """
    Forwards a chat completion to the upstream API after model remapping.
    Streaming requests are relayed byte-for-byte as server-sent events.
    """
    return await handler.handle(body, token)
