#!/usr/bin/env python3
"""
Poe Gateway
Serves OpenAI-style chat, image and model-list endpoints on top of a single
chat-completions upstream, remapping model names on the way.
"""

from contextlib import asynccontextmanager

import httpx
import uvicorn

from fastapi import FastAPI

from poe_gateway.shared.config import config, logger
from poe_gateway.shared.errors import GatewayError, gateway_error_handler
from poe_gateway.shared.middleware import RequestIDMiddleware, add_process_time_header, cors_middleware
from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.services.upstream_client import UpstreamClient
from poe_gateway.features.proxy_chat.endpoints import router as proxy_chat_router
from poe_gateway.features.image_generation.endpoints import router as image_generation_router
from poe_gateway.features.list_models.endpoints import router as list_models_router
from poe_gateway.features.metrics.endpoints import router as metrics_router
from poe_gateway.features.service_info.endpoints import router as service_info_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan resources."""
    client_kwargs = {"timeout": config["upstream"]["timeout"]}
    if config["requestProxy"]["enabled"] and config["requestProxy"]["url"]:
        client_kwargs["proxy"] = config["requestProxy"]["url"]
        logger.info("Using proxy for httpx client: %s", config["requestProxy"]["url"])
    app.state.http_client = httpx.AsyncClient(**client_kwargs)
    app.state.upstream_client = UpstreamClient(app.state.http_client, config["upstream"]["url"])

    # Loaded before the first request; never mutated afterwards.
    app.state.model_mapping = ModelMappingTable.load(config["mapping"]["path"])

    logger.info("Application startup complete")
    yield
    await app.state.http_client.aclose()
    logger.info("Application shutdown complete")

app = FastAPI(
    title="Poe Gateway",
    description="OpenAI-compatible gateway that remaps models and forwards chat/image requests upstream",
    version="1.0.0",
    lifespan=lifespan,
    # Unmatched paths, these included, fall through to the service info route.
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_exception_handler(GatewayError, gateway_error_handler)

app.include_router(proxy_chat_router, prefix="/v1", tags=["Gateway"])
app.include_router(image_generation_router, prefix="/v1", tags=["Gateway"])
app.include_router(list_models_router, prefix="/v1")
app.include_router(metrics_router)
app.include_router(service_info_router)

# Last added runs first: request id, then CORS/preflight, then timing.
app.middleware("http")(add_process_time_header)
app.middleware("http")(cors_middleware)
app.add_middleware(RequestIDMiddleware)

if __name__ == "__main__":
    host = config["server"]["host"]
    port = config["server"]["port"]

    logger.warning("Starting Poe Gateway on %s:%s", host, port)
    logger.warning("Chat completions: http://%s:%s/v1/chat/completions", host, port)
    logger.warning("Image generation: http://%s:%s/v1/images/generations", host, port)
    logger.warning("Model list: http://%s:%s/v1/models", host, port)

    log_config = uvicorn.config.LOGGING_CONFIG
    http_log_level = config["server"].get("http_log_level", "INFO").upper()
    log_config["loggers"]["uvicorn.access"]["level"] = http_log_level

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_config=log_config,
        timeout_graceful_shutdown=30,
        server_header=False
    )
