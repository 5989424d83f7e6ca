from pydantic import BaseModel
from typing import List

class GeneratedImage(BaseModel):
    url: str
    revised_prompt: str

class ImageGenerationResponse(BaseModel):
    """
    Response model mirroring the OpenAI images API.
    """
    created: int
    data: List[GeneratedImage]
