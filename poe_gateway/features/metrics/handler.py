from fastapi import Depends
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from poe_gateway.dependencies import get_model_mapping
from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.shared.metrics import MODEL_MAPPINGS

class MetricsHandler:
    """Handles the logic for serving monitoring metrics."""

    def __init__(self, mapping: ModelMappingTable = Depends(get_model_mapping)):
        self._mapping = mapping

    def get_raw_metrics(self) -> Response:
        """Returns raw metrics in Prometheus format."""
        MODEL_MAPPINGS.set(len(self._mapping))
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )
