"""
Model mapping table for the Poe Gateway.
Translates caller-facing model names into the identifiers the upstream expects.
"""

import json
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from poe_gateway.shared.config import logger
from poe_gateway.shared.metrics import MODEL_MAPPINGS


class ModelMappingTable:
    """
    Immutable snapshot of the forward (caller -> upstream) and reverse
    (upstream -> caller) model maps.

    A table is built once at startup and shared by every request. Reloading
    means building a new table and swapping the reference held by the app.
    """

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        forward = dict(mapping or {})
        # Several keys may share one upstream id; the last one wins.
        reverse = {value: key for key, value in forward.items()}
        self._forward: Mapping[str, str] = MappingProxyType(forward)
        self._reverse: Mapping[str, str] = MappingProxyType(reverse)

    @classmethod
    def load(cls, path: str) -> "ModelMappingTable":
        """
        Reads a JSON object of ``{"caller-model": "upstream-model"}`` pairs.

        Any failure (missing file, malformed JSON, wrong shape) is logged and
        yields an empty table, so the gateway keeps serving with identity
        mapping.
        """
        try:
            with open(path, encoding="utf-8") as file:
                data = json.load(file)
            if not isinstance(data, dict):
                raise ValueError("mapping document must be a JSON object")
            if not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
                raise ValueError("mapping keys and values must be strings")
        except (OSError, ValueError) as e:
            logger.warning("Could not load model mapping from %s, using empty mapping: %s", path, e)
            table = cls()
        else:
            table = cls(data)
            logger.info("Loaded %d model mappings from %s", len(table), path)

        MODEL_MAPPINGS.set(len(table))
        return table

    @property
    def forward(self) -> Mapping[str, str]:
        return self._forward

    @property
    def reverse(self) -> Mapping[str, str]:
        return self._reverse

    def __len__(self) -> int:
        return len(self._forward)

    def resolve(self, name: str) -> str:
        """Maps a caller-facing model name to the upstream one; unknown names pass through."""
        if name in self._forward:
            return self._forward[name]
        # Already an upstream id, or unknown: both pass through untouched.
        return name

    def model_ids(self) -> List[str]:
        """Caller-facing and upstream ids, deduplicated in insertion order."""
        return list(dict.fromkeys([*self._forward.keys(), *self._reverse.keys()]))
