"""
Text-generation providers.

One capability (turn a list of chat messages into text) with two wire
formats: OpenAI-style chat completions (groq, openai, deepseek) and Google
Gemini generateContent. Every failure (missing key, transport error,
non-success status, malformed body) raises GenerationError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from backend_txlens.config.settings import Settings
from backend_txlens.core.exceptions import GenerationError, ProviderNotConfiguredError

Message = dict[str, str]

CHAT_COMPLETIONS_BASE_URLS = {
    "groq": "https://api.groq.com/openai/v1",
    "openai": "https://api.openai.com/v1",
    "deepseek": "https://api.deepseek.com/v1",
}
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float = 0.7
    max_tokens: int = 500


def _error_message(resp: httpx.Response) -> str:
    """Best-effort upstream error text: error.message, message, then reason phrase."""
    try:
        data = resp.json()
    except ValueError:
        data = {}
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if data.get("message"):
            return str(data["message"])
    return resp.reason_phrase or f"HTTP {resp.status_code}"


class TextProvider(ABC):
    """A configured text-generation backend."""

    name: str = ""

    def __init__(self, api_key: str, model: str, http_client: httpx.AsyncClient) -> None:
        self.api_key = api_key
        self.model = model
        self._http = http_client

    async def complete(self, messages: list[Message], config: GenerationConfig) -> str:
        if not self.api_key:
            raise GenerationError(self.name, f"{self.name.upper()}_API_KEY is not configured")
        try:
            resp = await self._send(messages, config)
        except httpx.HTTPError as e:
            raise GenerationError(self.name, str(e) or type(e).__name__) from e
        if resp.is_error:
            raise GenerationError(self.name, _error_message(resp))
        try:
            data = resp.json()
        except ValueError as e:
            raise GenerationError(self.name, "response body is not JSON") from e
        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationError(self.name, f"malformed response body ({e!r})") from e
        if not isinstance(text, str):
            raise GenerationError(
                self.name, f"malformed response body (text is {type(text).__name__}, expected str)"
            )
        return text

    @abstractmethod
    async def _send(self, messages: list[Message], config: GenerationConfig) -> httpx.Response:
        ...

    @abstractmethod
    def _extract_text(self, data: Any) -> str:
        ...


class ChatCompletionsProvider(TextProvider):
    """OpenAI-compatible /chat/completions endpoint with bearer auth."""

    def __init__(
        self,
        name: str,
        base_url: str,
        api_key: str,
        model: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        super().__init__(api_key, model, http_client)
        self.name = name
        self.base_url = base_url.rstrip("/")

    async def _send(self, messages: list[Message], config: GenerationConfig) -> httpx.Response:
        return await self._http.post(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": self.model,
                "messages": messages,
                "temperature": config.temperature,
                "max_tokens": config.max_tokens,
            },
        )

    def _extract_text(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"] or ""


class GeminiProvider(TextProvider):
    """
    Gemini generateContent. Has no chat roles in this request shape, so the
    system prompt and the history are flattened into a single text part.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str,
        http_client: httpx.AsyncClient,
        base_url: str = GEMINI_BASE_URL,
    ) -> None:
        super().__init__(api_key, model, http_client)
        self.base_url = base_url.rstrip("/")

    @staticmethod
    def flatten(messages: list[Message]) -> str:
        system = [m["content"] for m in messages if m.get("role") == "system"]
        turns = [m for m in messages if m.get("role") != "system"]
        if len(turns) == 1 and turns[0].get("role") == "user":
            history = turns[0]["content"]
        else:
            history = "\n\n".join(
                f"{'User' if m.get('role') == 'user' else 'Assistant'}: {m['content']}" for m in turns
            )
        return "\n\n".join([*system, history]) if system else history

    async def _send(self, messages: list[Message], config: GenerationConfig) -> httpx.Response:
        return await self._http.post(
            f"{self.base_url}/models/{self.model}:generateContent",
            params={"key": self.api_key},
            json={
                "contents": [{"parts": [{"text": self.flatten(messages)}]}],
                "generationConfig": {
                    "temperature": config.temperature,
                    "maxOutputTokens": config.max_tokens,
                },
            },
        )

    def _extract_text(self, data: Any) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"] or ""


def build_provider(settings: Settings, http_client: httpx.AsyncClient) -> TextProvider:
    """Instantiate the provider named by settings.active_llm."""
    name = settings.active_llm
    if name == "gemini":
        return GeminiProvider(settings.active_api_key, settings.active_model, http_client)
    base_url = CHAT_COMPLETIONS_BASE_URLS.get(name)
    if base_url is None:
        raise ProviderNotConfiguredError(name)
    return ChatCompletionsProvider(name, base_url, settings.active_api_key, settings.active_model, http_client)
