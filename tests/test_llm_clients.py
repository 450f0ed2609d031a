import json

import httpx
import pytest

from sql_arena.schemas.quiz import QUESTION_RESPONSE_SCHEMA
from sql_arena.services.llm.base import ProviderError
from sql_arena.services.llm.gemini import GeminiLLMClient, to_gemini_schema
from sql_arena.services.llm.mock import MockLLM, UnavailableLLM
from sql_arena.services.llm.real import RealLLMClient


def _gemini(handler):
    return GeminiLLMClient(
        base_url="https://gemini.test/v1beta/",
        api_key="secret",
        model="gemini-2.5-flash",
        transport=httpx.MockTransport(handler),
    )


def test_gemini_structured_request_and_response():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["key"] = request.headers.get("x-goog-api-key")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": '{"a": 1}'}]}}]})

    text = _gemini(handler).complete("prompt", QUESTION_RESPONSE_SCHEMA)

    assert text == '{"a": 1}'
    assert captured["url"] == "https://gemini.test/v1beta/models/gemini-2.5-flash:generateContent"
    assert captured["key"] == "secret"
    config = captured["body"]["generationConfig"]
    assert config["responseMimeType"] == "application/json"
    assert config["responseSchema"]["type"] == "OBJECT"
    assert config["responseSchema"]["properties"]["hints"]["items"]["type"] == "STRING"
    assert captured["body"]["contents"][0]["parts"][0]["text"] == "prompt"


def test_gemini_free_form_request_has_no_schema():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "# Title"}, {"text": "\nBody"}]}}]})

    assert _gemini(handler).complete("write markdown") == "# Title\nBody"
    assert "responseSchema" not in captured["body"]["generationConfig"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(429, json={"error": {"message": "quota"}}),
        httpx.Response(200, json={"candidates": []}),
        httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "  "}]}}]}),
        httpx.Response(200, text="<html>not json</html>"),
    ],
)
def test_gemini_failures_raise_provider_error(response):
    client = _gemini(lambda request: response)
    with pytest.raises(ProviderError):
        client.complete("prompt", QUESTION_RESPONSE_SCHEMA)


def test_gemini_transport_error_raises_provider_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(ProviderError):
        _gemini(handler).complete("prompt")


def test_to_gemini_schema_leaves_descriptions_alone():
    converted = to_gemini_schema({"type": "number", "description": "Score between 0 and 100"})
    assert converted == {"type": "NUMBER", "description": "Score between 0 and 100"}


def test_openai_compatible_json_request():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": '{"ok": true}'}}]})

    client = RealLLMClient(
        base_url="https://llm.test",
        api_key="k",
        model="gpt-4o-mini",
        transport=httpx.MockTransport(handler),
    )
    assert client.complete("grade this", QUESTION_RESPONSE_SCHEMA) == '{"ok": true}'
    assert captured["url"] == "https://llm.test/v1/chat/completions"
    assert captured["auth"] == "Bearer k"
    assert captured["body"]["response_format"] == {"type": "json_object"}
    assert "questionText" in captured["body"]["messages"][0]["content"]
    assert captured["body"]["messages"][1] == {"role": "user", "content": "grade this"}


def test_openai_compatible_uses_chat_model_for_json_with_reasoner():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "{}"}}]})

    client = RealLLMClient("https://api.deepseek.com", "k", "deepseek-reasoner", transport=httpx.MockTransport(handler))
    client.complete("prompt", {"type": "object"})
    assert captured["body"]["model"] == "deepseek-chat"


def test_openai_compatible_missing_choices():
    client = RealLLMClient(
        "https://llm.test",
        "k",
        "m",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"choices": []})),
    )
    with pytest.raises(ProviderError):
        client.complete("prompt")


def test_mock_llm_shapes_payloads():
    llm = MockLLM()
    question = json.loads(llm.complete("Topic: joins\n", QUESTION_RESPONSE_SCHEMA))
    assert set(question) == {"questionText", "schemaContext", "hints"}
    assert "joins" in question["questionText"]
    assert llm.complete("Write a comprehensive, textbook-quality tutorial on Joins in SQL.").startswith("# Joins")


def test_unavailable_llm_always_fails():
    with pytest.raises(ProviderError, match="no API key"):
        UnavailableLLM("no API key configured").complete("prompt")
