import time

from fastapi import Depends

from poe_gateway.dependencies import get_model_mapping
from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.shared.constants import IMAGE_MODEL
from .query import ListModelsResponse, ModelCard

class ListModelsHandler:
    """
    Handles the business logic for listing models.
    Every caller-facing and upstream id known to the mapping table is
    reported, plus the image model the gateway emulates.
    """
    def __init__(
        self,
        mapping: ModelMappingTable = Depends(get_model_mapping),
    ):
        self._mapping = mapping

    def handle(self) -> ListModelsResponse:
        model_ids = self._mapping.model_ids()
        if IMAGE_MODEL not in model_ids:
            model_ids.append(IMAGE_MODEL)

        created = int(time.time())
        return ListModelsResponse(
            data=[ModelCard(id=model_id, created=created) for model_id in model_ids]
        )
