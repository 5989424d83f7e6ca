from pydantic import BaseModel

class ServiceInfoResponse(BaseModel):
    message: str
    models_loaded: int
