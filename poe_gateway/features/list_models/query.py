from pydantic import BaseModel
from typing import List

class ModelCard(BaseModel):
    id: str
    object: str = "model"
    created: int
    owned_by: str = "proxy"

class ListModelsResponse(BaseModel):
    """
    Response model for the list models endpoint, mirroring the API structure.
    """
    object: str = "list"
    data: List[ModelCard]
