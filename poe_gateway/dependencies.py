#!/usr/bin/env python3
"""
Dependency provider functions for the application.
"""

import json
import math
from typing import Any, Dict, Optional

from fastapi import Header, Request

from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.services.upstream_client import UpstreamClient
from poe_gateway.shared.errors import err_invalid_json, err_missing_token
from poe_gateway.shared.utils import extract_bearer_token

def get_upstream_client(request: Request) -> UpstreamClient:
    """Returns the shared UpstreamClient instance."""
    return request.app.state.upstream_client

def get_model_mapping(request: Request) -> ModelMappingTable:
    """Returns the model mapping snapshot loaded at startup."""
    return request.app.state.model_mapping

def _reject_constant(token: str) -> None:
    raise ValueError(f"non-finite number {token} is not valid JSON")

def _finite_float(token: str) -> float:
    value = float(token)
    if math.isinf(value):
        _reject_constant(token)
    return value

def require_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Returns the caller's bearer token, rejecting the request with 401 when absent."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise err_missing_token()
    return token

async def read_json_body(request: Request) -> Dict[str, Any]:
    """Parses the request body as a JSON object, rejecting anything else with 400."""
    try:
        body = json.loads(await request.body(), parse_float=_finite_float, parse_constant=_reject_constant)
    except ValueError as e:
        raise err_invalid_json(f"Invalid JSON body: {e}") from e
    if not isinstance(body, dict):
        raise err_invalid_json()
    return body
