import logging

from sql_arena.core.config import Settings
from sql_arena.services.llm.base import LLMClient
from sql_arena.services.llm.gemini import GeminiLLMClient
from sql_arena.services.llm.mock import MockLLM, UnavailableLLM
from sql_arena.services.llm.real import RealLLMClient
from sql_arena.services.provider_utils import normalize_base_url

logger = logging.getLogger(__name__)

OPENAI_COMPATIBLE = {"deepseek", "openai", "openai-compatible", "real"}


def build_llm_client(settings: Settings) -> LLMClient:
    provider = (settings.llm_provider or "").strip().lower() or "gemini"
    api_key = (settings.llm_api_key or "").strip()

    if provider in {"mock", "offline"}:
        return MockLLM()

    if provider == "gemini" or provider in OPENAI_COMPATIBLE:
        if not api_key:
            logger.warning("LLM_PROVIDER=%s but LLM_API_KEY is missing. AI features will use fallbacks.", provider)
            return UnavailableLLM(f"LLM_PROVIDER={provider} has no API key configured.")
        if not (settings.llm_base_url or "").strip():
            logger.warning("LLM_PROVIDER=%s but LLM_BASE_URL is missing. AI features will use fallbacks.", provider)
            return UnavailableLLM(f"LLM_PROVIDER={provider} has no base URL configured.")

    if provider == "gemini":
        return GeminiLLMClient(
            base_url=settings.llm_base_url,
            api_key=api_key,
            model=settings.llm_model,
            timeout=settings.llm_timeout,
            max_tokens=settings.llm_max_tokens,
        )

    if provider in OPENAI_COMPATIBLE:
        return RealLLMClient(
            base_url=normalize_base_url(settings.llm_base_url),
            api_key=api_key,
            model=settings.llm_model,
            timeout=settings.llm_timeout,
            max_tokens=settings.llm_max_tokens,
        )

    logger.warning("Unknown LLM_PROVIDER=%s. AI features will use fallbacks.", provider)
    return UnavailableLLM(f"Unknown LLM_PROVIDER={provider}.")
