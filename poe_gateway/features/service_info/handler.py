from fastapi import Depends

from poe_gateway.dependencies import get_model_mapping
from poe_gateway.services.model_mapping import ModelMappingTable
from .query import ServiceInfoResponse

ENDPOINTS_SUMMARY = "OK, POST /v1/chat/completions, POST /v1/images/generations, GET /v1/models"

class ServiceInfoHandler:
    def __init__(self, mapping: ModelMappingTable = Depends(get_model_mapping)):
        self._mapping = mapping

    def handle(self) -> ServiceInfoResponse:
        return ServiceInfoResponse(message=ENDPOINTS_SUMMARY, models_loaded=len(self._mapping))
