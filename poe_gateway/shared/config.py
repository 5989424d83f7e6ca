#!/usr/bin/env python3
"""
Configuration module for the Poe Gateway.
Loads settings from an optional YAML file and initializes logging with Pydantic validation.
"""

import os
import sys
import logging
from typing import Dict, Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

CONFIG_FILE = os.environ.get("GATEWAY_CONFIG", "config.yml")


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    http_log_level: str = "INFO"


class UpstreamConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str = "https://api.poe.com/v1/chat/completions"
    timeout: float = 600.0


class MappingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    path: str = "models.json"


class RequestProxyConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    enabled: bool = False
    url: Optional[str] = None


def load_config(path: str = CONFIG_FILE) -> Dict[str, Any]:
    """Load and validate configuration with Pydantic models.

    The file is optional: every section has usable defaults, so a gateway
    started with no ``config.yml`` serves on port 8000 against the default
    upstream.
    """
    try:
        try:
            with open(path, encoding="utf-8") as file:
                config_data = yaml.safe_load(file) or {}
        except FileNotFoundError:
            config_data = {}

        if not isinstance(config_data, dict):
            raise ValueError(f"top-level YAML document in {path} must be a mapping")

        # Environment variable override for the mapping file location
        if "MODEL_MAPPING_FILE" in os.environ:
            config_data.setdefault("mapping", {})["path"] = os.environ["MODEL_MAPPING_FILE"]

        config_data["server"] = ServerConfig(**(config_data.get("server") or {})).model_dump()
        config_data["upstream"] = UpstreamConfig(**(config_data.get("upstream") or {})).model_dump()
        config_data["mapping"] = MappingConfig(**(config_data.get("mapping") or {})).model_dump()
        config_data["requestProxy"] = RequestProxyConfig(**(config_data.get("requestProxy") or {})).model_dump()

        return config_data
    except (yaml.YAMLError, ValidationError, ValueError) as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)


def setup_logging(config_: Dict[str, Any]) -> logging.Logger:
    """Configure logging based on validated configuration."""
    log_level = config_["server"]["log_level"]
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level_int,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger_ = logging.getLogger("poe-gateway")
    logger_.info("Logging level set to %s", log_level)
    return logger_


# Load and validate configuration once at startup
config = load_config()
logger = setup_logging(config)
