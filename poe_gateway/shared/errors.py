from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from poe_gateway.shared.constants import CORS_HEADERS, STATUS_ERROR_TYPES


class GatewayError(HTTPException):
    """HTTP error rendered as an OpenAI-style ``{"error": {...}}`` body."""

    def __init__(
        self, status_code: int, err_type: str | None, message: str, **extra: Any
    ):
        error: dict[str, Any] = {"message": message}
        if err_type:
            error["type"] = err_type
        error.update(extra)
        super().__init__(status_code=status_code, detail={"error": error})


def error_type_for_status(status_code: int) -> str:
    return STATUS_ERROR_TYPES.get(status_code, "unknown_error")


def err_missing_token() -> GatewayError:
    return GatewayError(401, "authentication_error", "Missing Bearer token")


def err_invalid_json(reason: str = "Request body must be a JSON object") -> GatewayError:
    return GatewayError(400, "invalid_request_error", reason)


def err_invalid_size(size: Any) -> GatewayError:
    return GatewayError(
        400,
        "invalid_request_error",
        f"Unsupported image size '{size}'. Only 1024x1024 is supported.",
        param="size",
        code="invalid_size",
    )


def err_unsupported_image_model(model: Any) -> GatewayError:
    return GatewayError(
        400,
        "invalid_request_error",
        f"Model '{model}' is not supported. Only dall-e-3 model is supported for image generation",
        param="model",
        code="model_not_supported",
    )


def err_network() -> GatewayError:
    return GatewayError(408, "timeout_error", "Network error or timeout")


def err_upstream(status_code: int, message: str | None) -> GatewayError:
    return GatewayError(
        status_code,
        error_type_for_status(status_code),
        message or "Upstream API error",
    )


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.detail,
        headers=CORS_HEADERS,
    )
