"""
Tests for text-generation providers and TextGenerationClient.

Each provider is driven through httpx.MockTransport; request shape and error
mapping to GenerationError are checked for both wire formats.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from backend_txlens.config import Settings
from backend_txlens.core.exceptions import GenerationError, ProviderNotConfiguredError
from backend_txlens.llm.client import TextGenerationClient
from backend_txlens.llm.providers import (
    ChatCompletionsProvider,
    GeminiProvider,
    GenerationConfig,
    build_provider,
)

MESSAGES = [
    {"role": "system", "content": "You are a tutor."},
    {"role": "user", "content": "What is a lamport?"},
]


def _run_with(handler, make_provider, messages=MESSAGES, config=GenerationConfig()):
    """Run provider.complete against a MockTransport; return (text, captured requests)."""
    captured: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return handler(request)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(record)) as http:
            return await make_provider(http).complete(messages, config)

    return asyncio.run(run()), captured


def _chat_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "A tiny SOL unit."}}]})


def test_chat_completions_request_shape():
    text, [request] = _run_with(
        _chat_ok,
        lambda http: ChatCompletionsProvider("groq", "https://api.groq.com/openai/v1", "k-123", "llama-3.3-70b-versatile", http),
    )
    assert text == "A tiny SOL unit."
    assert str(request.url) == "https://api.groq.com/openai/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer k-123"
    body = json.loads(request.content)
    assert body == {
        "model": "llama-3.3-70b-versatile",
        "messages": MESSAGES,
        "temperature": 0.7,
        "max_tokens": 500,
    }


def test_chat_completions_error_status_uses_upstream_message():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "Invalid API Key"}})

    with pytest.raises(GenerationError, match="openai API error: Invalid API Key"):
        _run_with(handler, lambda http: ChatCompletionsProvider("openai", "https://api.openai.com/v1", "bad", "gpt-4o-mini", http))


def test_error_status_without_json_body_uses_reason_phrase():
    def handler(request):
        return httpx.Response(503, text="down")

    with pytest.raises(GenerationError, match="Service Unavailable"):
        _run_with(handler, lambda http: ChatCompletionsProvider("deepseek", "https://api.deepseek.com/v1", "k", "deepseek-chat", http))


@pytest.mark.parametrize(
    "body",
    [{}, {"choices": []}, {"choices": [{"message": None}]}],
)
def test_malformed_body_raises_generation_error(body):
    with pytest.raises(GenerationError, match="malformed response body"):
        _run_with(lambda r: httpx.Response(200, json=body), lambda http: ChatCompletionsProvider("groq", "https://g.test", "k", "m", http))


def test_non_json_body_raises_generation_error():
    with pytest.raises(GenerationError, match="not JSON"):
        _run_with(lambda r: httpx.Response(200, text="hello"), lambda http: ChatCompletionsProvider("groq", "https://g.test", "k", "m", http))


def test_missing_key_fails_without_request():
    with pytest.raises(GenerationError, match="GROQ_API_KEY is not configured") as exc_info:
        _run_with(_chat_ok, lambda http: ChatCompletionsProvider("groq", "https://g.test", "", "m", http))
    assert exc_info.value.provider == "groq"


def test_transport_error_raises_generation_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(GenerationError, match="timed out"):
        _run_with(handler, lambda http: ChatCompletionsProvider("groq", "https://g.test", "k", "m", http))


def test_gemini_request_shape():
    def handler(request):
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Gemini says hi"}]}}]})

    text, [request] = _run_with(
        handler,
        lambda http: GeminiProvider("g-key", "gemini-2.0-flash-exp", http),
        config=GenerationConfig(temperature=0.2, max_tokens=2000),
    )
    assert text == "Gemini says hi"
    assert request.url.path == "/v1beta/models/gemini-2.0-flash-exp:generateContent"
    assert request.url.params["key"] == "g-key"
    body = json.loads(request.content)
    assert body["generationConfig"] == {"temperature": 0.2, "maxOutputTokens": 2000}
    assert body["contents"][0]["parts"][0]["text"] == "You are a tutor.\n\nWhat is a lamport?"


def test_gemini_flatten_multi_turn_history():
    flat = GeminiProvider.flatten(
        [
            {"role": "system", "content": "SYS"},
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
            {"role": "user", "content": "bye"},
        ]
    )
    assert flat == "SYS\n\nUser: hi\n\nAssistant: hello\n\nUser: bye"


def test_gemini_flatten_single_prompt_is_verbatim():
    assert GeminiProvider.flatten([{"role": "user", "content": "Explain."}]) == "Explain."


@pytest.mark.parametrize(
    "provider,expected_cls,base",
    [
        ("groq", ChatCompletionsProvider, "https://api.groq.com/openai/v1"),
        ("openai", ChatCompletionsProvider, "https://api.openai.com/v1"),
        ("deepseek", ChatCompletionsProvider, "https://api.deepseek.com/v1"),
        ("gemini", GeminiProvider, "https://generativelanguage.googleapis.com/v1beta"),
    ],
)
def test_build_provider_selects_wire_format(provider, expected_cls, base, http_client):
    settings = Settings(active_llm=provider, api_keys={provider: "key"})
    built = build_provider(settings, http_client)
    assert isinstance(built, expected_cls)
    assert built.name == provider
    assert built.base_url == base
    assert built.api_key == "key"
    assert built.model == settings.active_model


def test_build_provider_unknown_name(http_client):
    with pytest.raises(ProviderNotConfiguredError, match="CLAUDIUS API key not configured"):
        build_provider(Settings(active_llm="claudius"), http_client)


def test_generation_client_wraps_prompt_as_user_message():
    captured: list[dict] = []

    def handler(request):
        captured.append(json.loads(request.content))
        return _chat_ok(request)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = TextGenerationClient(ChatCompletionsProvider("groq", "https://g.test", "k", "m", http))
            assert client.provider_name == "groq"
            return await client.generate("Describe the System Program.")

    assert asyncio.run(run()) == "A tiny SOL unit."
    assert captured[0]["messages"] == [{"role": "user", "content": "Describe the System Program."}]
    assert captured[0]["max_tokens"] == 500


def test_generation_client_reraises_generation_error():
    async def run():
        transport = httpx.MockTransport(lambda r: httpx.Response(429, json={"message": "slow down"}))
        async with httpx.AsyncClient(transport=transport) as http:
            client = TextGenerationClient(ChatCompletionsProvider("groq", "https://g.test", "k", "m", http))
            await client.chat([{"role": "user", "content": "hi"}])

    with pytest.raises(GenerationError, match="slow down"):
        asyncio.run(run())


@pytest.mark.parametrize("content", [[{"type": "text", "text": "hi"}], {"text": "hi"}, 42])
def test_chat_completions_non_string_content_raises_generation_error(content):
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})

    with pytest.raises(GenerationError, match="malformed response body"):
        _run_with(handler, lambda http: ChatCompletionsProvider("groq", "https://g.test", "k", "m", http))


def test_gemini_non_string_text_raises_generation_error():
    def handler(request):
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": ["a", "b"]}]}}]})

    with pytest.raises(GenerationError, match="text is list, expected str"):
        _run_with(handler, lambda http: GeminiProvider("g-key", "gemini-2.0-flash-exp", http))
