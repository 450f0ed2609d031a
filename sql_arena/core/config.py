import os
from dataclasses import dataclass
from typing import List

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
OPENAI_BASE_URL = "https://api.openai.com"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    llm_provider: str
    llm_base_url: str
    llm_model: str
    llm_api_key: str
    llm_timeout: float
    llm_max_tokens: int
    cors_origins: List[str]
    create_tables: bool


def _default_base_url(provider: str) -> str:
    if provider == "gemini":
        return GEMINI_BASE_URL
    if provider == "deepseek":
        return "https://api.deepseek.com"
    return OPENAI_BASE_URL


def _load_api_key() -> str:
    for name in ("LLM_API_KEY", "GEMINI_API_KEY", "API_KEY"):
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


def _load_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    if raw:
        return [item.strip() for item in raw.split(",") if item.strip()]
    return ["http://localhost:5173", "http://127.0.0.1:5173"]


def load_settings() -> Settings:
    llm_provider = os.getenv("LLM_PROVIDER", "gemini").strip().lower() or "gemini"
    llm_base_url = os.getenv("LLM_BASE_URL", "").strip() or _default_base_url(llm_provider)
    llm_model = os.getenv("LLM_MODEL", "gemini-2.5-flash")
    llm_timeout = float(os.getenv("LLM_TIMEOUT", "30"))
    llm_max_tokens = int(os.getenv("LLM_MAX_TOKENS", "2048"))
    create_tables = os.getenv("CREATE_TABLES", "1").strip().lower() in TRUTHY

    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///sql_arena.db"),
        llm_provider=llm_provider,
        llm_base_url=llm_base_url,
        llm_model=llm_model,
        llm_api_key=_load_api_key(),
        llm_timeout=llm_timeout,
        llm_max_tokens=llm_max_tokens,
        cors_origins=_load_cors_origins(),
        create_tables=create_tables,
    )
