from sql_arena.core.config import GEMINI_BASE_URL, load_settings
from sql_arena.services.llm.gemini import GeminiLLMClient
from sql_arena.services.llm.mock import MockLLM, UnavailableLLM
from sql_arena.services.llm.real import RealLLMClient
from sql_arena.services.provider_factory import build_llm_client

ENV_VARS = [
    "DATABASE_URL",
    "LLM_PROVIDER",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "LLM_API_KEY",
    "GEMINI_API_KEY",
    "API_KEY",
    "LLM_TIMEOUT",
    "LLM_MAX_TOKENS",
    "CORS_ORIGINS",
    "CREATE_TABLES",
]


def _clear(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    settings = load_settings()
    assert settings.database_url == "sqlite:///sql_arena.db"
    assert settings.llm_provider == "gemini"
    assert settings.llm_base_url == GEMINI_BASE_URL
    assert settings.llm_model == "gemini-2.5-flash"
    assert settings.llm_api_key == ""
    assert settings.llm_timeout == 30.0
    assert settings.create_tables is True


def test_api_key_aliases_and_overrides(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("API_KEY", "from-api-key")
    monkeypatch.setenv("LLM_PROVIDER", "DeepSeek")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("CREATE_TABLES", "off")
    settings = load_settings()
    assert settings.llm_api_key == "from-api-key"
    assert settings.llm_provider == "deepseek"
    assert settings.llm_base_url == "https://api.deepseek.com"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.create_tables is False


def test_factory_selects_clients(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("LLM_API_KEY", "k")
    assert isinstance(build_llm_client(load_settings()), GeminiLLMClient)

    monkeypatch.setenv("LLM_PROVIDER", "openai")
    client = build_llm_client(load_settings())
    assert isinstance(client, RealLLMClient)
    assert client.base_url == "https://api.openai.com/v1"

    monkeypatch.setenv("LLM_PROVIDER", "mock")
    assert isinstance(build_llm_client(load_settings()), MockLLM)


def test_factory_without_key_or_unknown_provider_uses_unavailable(monkeypatch):
    _clear(monkeypatch)
    assert isinstance(build_llm_client(load_settings()), UnavailableLLM)
    monkeypatch.setenv("LLM_API_KEY", "k")
    monkeypatch.setenv("LLM_PROVIDER", "carrier-pigeon")
    assert isinstance(build_llm_client(load_settings()), UnavailableLLM)
