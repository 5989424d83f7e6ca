from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Any

# OpenAI chat-completions parameters forwarded as top-level fields.
STANDARD_PARAMS = frozenset({
    "model", "messages", "max_tokens", "max_completion_tokens", "stream",
    "stream_options", "top_p", "stop", "temperature", "n", "presence_penalty",
    "frequency_penalty", "logit_bias", "user", "functions", "function_call",
    "tools", "tool_choice", "response_format", "seed", "prompt", "size",
    "quality", "style",
})

TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0


class ProxyChatRequest(BaseModel):
    """
    Incoming chat-completion body. Only the fields the gateway inspects are
    typed; every other field is kept as an extra and forwarded.
    """
    model_config = ConfigDict(extra="allow")

    model: Optional[str] = None
    messages: Optional[List[Dict[str, Any]]] = None
    stream: Optional[bool] = None
    temperature: Optional[float] = None
    extra_body: Optional[Dict[str, Any]] = None

    def to_upstream(self, model: Optional[str]) -> Dict[str, Any]:
        """
        Builds the outbound body: recognized parameters at the top level,
        everything else folded into ``extra_body``. Fields the caller never
        sent are omitted.
        """
        payload: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        declared = type(self).model_fields
        for key, value in self.model_dump().items():
            if key == "extra_body" or (key in declared and key not in self.model_fields_set):
                continue
            if key in STANDARD_PARAMS:
                payload[key] = value
            else:
                extras[key] = value

        if model is not None:
            payload["model"] = model
        if payload.get("temperature") is not None:
            payload["temperature"] = min(max(payload["temperature"], TEMPERATURE_MIN), TEMPERATURE_MAX)

        extra_body = {**extras, **(self.extra_body or {})}
        if extra_body:
            payload["extra_body"] = extra_body
        return payload
