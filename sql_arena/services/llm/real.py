import json
import logging
import re
from typing import Any, Dict, Optional

import httpx

from sql_arena.services.provider_utils import normalize_base_url

from .base import LLMClient, ProviderError

logger = logging.getLogger(__name__)


class RealLLMClient(LLMClient):
    """Client for OpenAI-compatible ``/chat/completions`` endpoints."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        json_model: str | None = None,
        timeout: float = 30.0,
        max_tokens: int = 2048,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = normalize_base_url(base_url)
        self.api_key = api_key
        self.model = model
        self.json_model = json_model or ""
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.transport = transport

    def complete(self, prompt: str, schema: Optional[Dict[str, Any]] = None) -> str:
        structured = schema is not None
        model = self._model_for(structured)
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": _system_prompt(schema)},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.0 if structured else 0.4,
            "max_tokens": self.max_tokens,
        }
        if structured:
            payload["response_format"] = {"type": "json_object"}

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ProviderError(f"Chat completion request failed: {exc}") from exc

        choices = data.get("choices") or []
        if not choices:
            raise ProviderError("LLM response missing choices.")
        content = _message_text(choices[0].get("message") or {}, structured)
        if not content:
            raise ProviderError("LLM response missing content.")
        logger.debug("Chat completion returned %d characters from %s", len(content), model)
        return content

    def _model_for(self, structured: bool) -> str:
        # deepseek-reasoner has no JSON mode.
        if not structured:
            return self.model
        override = self.json_model.strip()
        if not override and "reasoner" in (self.model or ""):
            override = "deepseek-chat"
        return override or self.model


def _system_prompt(schema: Optional[Dict[str, Any]]) -> str:
    if schema is None:
        return "You are a senior SQL instructor writing study material in Markdown."
    return (
        "You are a strict JSON generator. Output only a JSON object, no extra text.\n"
        "The object must match this JSON schema:\n"
        f"{json.dumps(schema, ensure_ascii=False)}"
    )


def _message_text(message: Dict[str, Any], structured: bool) -> str:
    content = (message.get("content") or "").strip()
    if content:
        return content
    reasoning = (message.get("reasoning_content") or "").strip()
    if not structured:
        return reasoning
    matches = re.findall(r"\{.*\}", reasoning, re.DOTALL)
    return matches[-1].strip() if matches else ""
