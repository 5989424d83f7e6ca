from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any

from poe_gateway.shared.constants import SUPPORTED_IMAGE_SIZE

IMAGE_TEMPERATURE = 0.7
IMAGE_MAX_TOKENS = 1000


class ImageGenerationRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Any JSON value is accepted; null or falsy values fall back to defaults.
    model: Optional[Any] = None
    prompt: Optional[Any] = None
    size: Optional[Any] = None
    quality: Optional[Any] = None
    style: Optional[Any] = None
    n: Optional[Any] = None

    def instruction(self) -> str:
        """Natural-language request handed to the chat model."""
        return (
            "Generate an image with the following specifications:\n"
            f"Prompt: {self.prompt or ''}\n"
            f"Size: {self.size or SUPPORTED_IMAGE_SIZE}\n"
            f"Quality: {self.quality or 'standard'}\n"
            f"Style: {self.style or 'vivid'}\n"
            f"Number of images: {self.n or 1}"
        )

    def to_chat_payload(self, model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": self.instruction()}],
            "max_tokens": IMAGE_MAX_TOKENS,
            "temperature": IMAGE_TEMPERATURE,
            "size": self.size or SUPPORTED_IMAGE_SIZE,
        }
