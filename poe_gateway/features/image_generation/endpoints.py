from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from poe_gateway.dependencies import read_json_body, require_bearer_token
from .handler import ImageGenerationHandler

router = APIRouter()

@router.post("/images/generations", response_model=None)
async def generate_image(
    token: str = Depends(require_bearer_token),
    body: Dict[str, Any] = Depends(read_json_body),
    handler: ImageGenerationHandler = Depends(ImageGenerationHandler),
) -> JSONResponse:
    """
    Serves dall-e-3 image generation by asking the upstream chat model for an
    image and reshaping its reply into an images API response.
    """
    return await handler.handle(body, token)
