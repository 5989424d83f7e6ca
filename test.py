#!/usr/bin/env python3
"""
Smoke test script for a running Poe Gateway.
Exercises every endpoint using configuration from config.yml (if present).

Usage: API_TOKEN=<upstream token> python test.py
"""

import asyncio
import json
import os
from typing import Dict, Any

import httpx
import yaml

MODEL = os.environ.get("SMOKE_MODEL", "gpt-4o")
STREAM = os.environ.get("SMOKE_STREAM", "0") == "1"

def load_config() -> Dict[str, Any]:
    """Load configuration from config.yml, falling back to defaults"""
    try:
        with open("config.yml", encoding="utf-8") as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError:
        return {}

async def test_feature(feature_name: str, test_func: callable):
    """Run a feature test with formatted output"""
    print(f"\n=== Testing {feature_name} ===")
    try:
        await test_func()
        print(f"✅ {feature_name} test passed")
    except Exception as e:
        print(f"❌ {feature_name} test failed: {str(e)}")
        raise

async def test_list_models(client: httpx.AsyncClient, base_url: str):
    """Test the List Models feature - requires no auth header"""
    resp = await client.get(f"{base_url}/v1/models")
    resp.raise_for_status()
    data = resp.json()
    ids = [m["id"] for m in data.get("data", [])]
    assert "dall-e-3" in ids, "Expected dall-e-3 in model list"
    print(f"Found {len(ids)} models")

async def test_missing_token(client: httpx.AsyncClient, base_url: str):
    """Requests without a bearer token must be rejected locally"""
    resp = await client.post(f"{base_url}/v1/chat/completions", json={"model": MODEL, "messages": []})
    assert resp.status_code == 401, f"Expected 401, got {resp.status_code}"

async def test_proxy_chat(client: httpx.AsyncClient, base_url: str, headers: Dict[str, str]):
    """Test the Proxy Chat feature"""
    url = f"{base_url}/v1/chat/completions"
    request_data = {
        "model": MODEL,
        "messages": [{"role": "user", "content": "Hello!"}],
        "stream": STREAM,
    }

    if STREAM:
        async with client.stream("POST", url, headers=headers, json=request_data) as resp:
            resp.raise_for_status()
            async for line in resp.aiter_lines():
                line = line.strip()
                if not line.startswith("data: "):
                    continue
                content = line[6:].strip()
                if content == "[DONE]":
                    continue
                try:
                    json.loads(content)
                    print(".", end="", flush=True)
                except json.JSONDecodeError:
                    print("", end="", flush=True)
        print("\nStream completed")
    else:
        resp = await client.post(url, headers=headers, json=request_data)
        resp.raise_for_status()
        print("Chat completion received")

async def test_image_generation(client: httpx.AsyncClient, base_url: str, headers: Dict[str, str]):
    """Test the Image Generation feature"""
    resp = await client.post(
        f"{base_url}/v1/images/generations",
        headers=headers,
        json={"model": "dall-e-3", "prompt": "A lighthouse at dusk", "size": "1024x1024"},
    )
    resp.raise_for_status()
    image = resp.json()["data"][0]
    print(f"Image URL: {image['url']}")
    print(f"Revised prompt: {image['revised_prompt']}")

async def run_tests():
    """Run all feature tests"""
    config = load_config()
    server_config = config.get("server") or {}

    host = server_config.get("host", "127.0.0.1")
    host = "127.0.0.1" if host == "0.0.0.0" else host
    port = server_config.get("port", 8000)
    base_url = f"http://{host}:{port}"
    token = os.environ.get("API_TOKEN", "")
    headers = {"Authorization": f"Bearer {token}"} if token else {}

    async with httpx.AsyncClient(timeout=120.0) as client:
        await test_feature("List Models", lambda: test_list_models(client, base_url))
        await test_feature("Missing Token", lambda: test_missing_token(client, base_url))
        if not token:
            print("\nAPI_TOKEN not set, skipping upstream round trips")
            return
        await test_feature("Proxy Chat", lambda: test_proxy_chat(client, base_url, headers))
        await test_feature("Image Generation", lambda: test_image_generation(client, base_url, headers))

if __name__ == "__main__":
    print("Running Poe Gateway smoke tests")
    asyncio.run(run_tests())
