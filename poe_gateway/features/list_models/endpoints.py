from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from poe_gateway.shared.constants import CORS_HEADERS
from .handler import ListModelsHandler

router = APIRouter()

@router.get("/models", response_model=None, tags=["Gateway"])
def list_models(
    handler: ListModelsHandler = Depends(ListModelsHandler),
) -> JSONResponse:
    """
    Returns the model ids known to the mapping table, always including dall-e-3.
    """
    return JSONResponse(content=handler.handle().model_dump(), headers=CORS_HEADERS)
