from poe_gateway.services.model_mapping import ModelMappingTable
from poe_gateway.dependencies import get_model_mapping

from main import app


def test_models_lists_mapping_ids_and_dall_e_3(client):
    r = client.get("/v1/models")

    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"
    body = r.json()
    assert body["object"] == "list"
    ids = [m["id"] for m in body["data"]]
    assert ids.count("dall-e-3") == 1
    assert set(ids) == {
        "gpt-4o", "gpt-4", "claude-3-5-sonnet", "dall-e-3",
        "GPT-4o", "Claude-3.5-Sonnet", "FLUX-pro",
    }
    for card in body["data"]:
        assert card["object"] == "model"
        assert card["owned_by"] == "proxy"
        assert isinstance(card["created"], int)


def test_models_with_empty_mapping_still_lists_dall_e_3(client):
    app.dependency_overrides[get_model_mapping] = lambda: ModelMappingTable()

    r = client.get("/v1/models")

    assert [m["id"] for m in r.json()["data"]] == ["dall-e-3"]


def test_models_needs_no_token(client, upstream):
    assert client.get("/v1/models").status_code == 200
    assert upstream.requests == []


def test_preflight_on_any_path(client):
    for path in ("/v1/chat/completions", "/v1/images/generations", "/anything/else"):
        r = client.options(path)

        assert r.status_code == 204
        assert r.content == b""
        assert r.headers["access-control-allow-origin"] == "*"
        assert r.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
        assert r.headers["access-control-allow-headers"] == "authorization, content-type"


def test_unmatched_paths_return_service_info(client, upstream):
    for method, path in (
        ("GET", "/"), ("GET", "/health"), ("POST", "/v1/embeddings"), ("GET", "/v1/chat/completions"),
        ("GET", "/docs"), ("GET", "/redoc"), ("GET", "/openapi.json"),
    ):
        r = client.request(method, path)

        assert r.status_code == 200
        body = r.json()
        assert "POST /v1/chat/completions" in body["message"]
        assert "POST /v1/images/generations" in body["message"]
        assert body["models_loaded"] == 4
        assert r.headers["access-control-allow-origin"] == "*"

    assert upstream.requests == []


def test_request_id_and_process_time_headers(client):
    r = client.get("/v1/models", headers={"X-Request-ID": "req-123"})

    assert r.headers["x-request-id"] == "req-123"
    assert float(r.headers["x-process-time"]) >= 0


def test_metrics_endpoint_exposes_gateway_counters(client):
    client.post(
        "/v1/chat/completions",
        headers={"Authorization": "Bearer sk-test-token"},
        json={"model": "gpt-4o", "messages": []},
    )

    r = client.get("/metrics")

    assert r.status_code == 200
    assert "gateway_upstream_requests_total" in r.text
    assert "gateway_model_mappings 4.0" in r.text
