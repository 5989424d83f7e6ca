from fastapi import APIRouter, Depends

from .handler import ServiceInfoHandler
from .query import ServiceInfoResponse

router = APIRouter()

# Catch-all: doubles as health check and endpoint documentation.
# Must be registered after every other router.
@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"],
    response_model=ServiceInfoResponse,
    tags=["Monitoring"],
)
def service_info(path: str, handler: ServiceInfoHandler = Depends()) -> ServiceInfoResponse:
    return handler.handle()
