from __future__ import annotations

import re
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from sql_arena.services.llm.base import ResponseDecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_RE = re.compile(r"```[a-zA-Z0-9_-]*\s*(.*?)```", re.DOTALL)


def normalize_base_url(base_url: str) -> str:
    cleaned = (base_url or "").strip().rstrip("/")
    if not cleaned:
        return ""
    if cleaned.endswith("/v1"):
        return cleaned
    return f"{cleaned}/v1"


def strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    if cleaned.startswith("{") or cleaned.startswith("["):
        return cleaned
    match = _FENCE_RE.search(cleaned)
    if match:
        return match.group(1).strip()
    return cleaned


def decode_json_response(raw: str, model: Type[ModelT]) -> ModelT:
    """Validate provider text against ``model``; any mismatch is a ResponseDecodeError."""
    text = strip_code_fences(raw)
    if not text:
        raise ResponseDecodeError("Provider returned an empty body.")
    try:
        return model.model_validate_json(text)
    except ValidationError as exc:
        raise ResponseDecodeError(f"Provider JSON did not match {model.__name__}: {exc}") from exc
