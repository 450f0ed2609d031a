import logging
from typing import Any, Dict, Optional

import httpx

from .base import LLMClient, ProviderError

logger = logging.getLogger(__name__)


def to_gemini_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a JSON-schema dict to the upper-case type names Gemini expects."""
    converted: Dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type" and isinstance(value, str):
            converted[key] = value.upper()
        elif key == "properties" and isinstance(value, dict):
            converted[key] = {name: to_gemini_schema(prop) for name, prop in value.items()}
        elif key == "items" and isinstance(value, dict):
            converted[key] = to_gemini_schema(value)
        else:
            converted[key] = value
    return converted


class GeminiLLMClient(LLMClient):
    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        timeout: float = 30.0,
        max_tokens: int = 2048,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or "").strip().rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.transport = transport

    def complete(self, prompt: str, schema: Optional[Dict[str, Any]] = None) -> str:
        generation_config: Dict[str, Any] = {"maxOutputTokens": self.max_tokens}
        if schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = to_gemini_schema(schema)
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    json=payload,
                    headers={"x-goog-api-key": self.api_key},
                )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ProviderError(f"Gemini request failed: {exc}") from exc

        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback") or {}
            raise ProviderError(f"Gemini response missing candidates: {feedback.get('blockReason', 'unknown')}")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        content = "".join(part.get("text") or "" for part in parts).strip()
        if not content:
            raise ProviderError("Gemini response missing content.")
        logger.debug("Gemini returned %d characters from %s", len(content), self.model)
        return content
