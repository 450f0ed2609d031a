from typing import Any, Dict, Optional, Protocol


class ProviderError(Exception):
    """The AI provider could not produce a usable completion."""


class ResponseDecodeError(ProviderError):
    """The completion text did not decode into the expected structure."""


class LLMClient(Protocol):
    def complete(self, prompt: str, schema: Optional[Dict[str, Any]] = None) -> str:
        ...
