import json
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from poe_gateway.dependencies import get_model_mapping, get_upstream_client
from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.services.upstream_client import UpstreamClient

UPSTREAM_URL = "https://upstream.test/v1/chat/completions"
AUTH = {"Authorization": "Bearer sk-test-token"}

SAMPLE_MAPPING = {
    "gpt-4o": "GPT-4o",
    "gpt-4": "GPT-4o",
    "claude-3-5-sonnet": "Claude-3.5-Sonnet",
    "dall-e-3": "FLUX-pro",
}


class FakeUpstream:
    """Records outbound requests and answers with a configurable handler."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": "hi"}}]}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def mapping() -> ModelMappingTable:
    return ModelMappingTable(SAMPLE_MAPPING)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(mapping, upstream):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app.dependency_overrides[get_model_mapping] = lambda: mapping
    app.dependency_overrides[get_upstream_client] = lambda: UpstreamClient(http_client, UPSTREAM_URL)
    yield TestClient(app)
    app.dependency_overrides.clear()
