#!/usr/bin/env python3
"""
Metrics definitions for the Poe Gateway.
"""

import prometheus_client

MODEL_MAPPINGS = prometheus_client.Gauge(
    'gateway_model_mappings', 'Number of model mappings loaded from the mapping file'
)
UPSTREAM_REQUESTS = prometheus_client.Counter(
    'gateway_upstream_requests', 'Requests forwarded to the upstream API', ['endpoint', 'status']
)
UPSTREAM_FAILURES = prometheus_client.Counter(
    'gateway_upstream_failures', 'Upstream requests that failed at the network level', ['endpoint']
)
IMAGES_GENERATED = prometheus_client.Counter(
    'gateway_images_generated', 'Image generation replies synthesized from chat completions'
)
