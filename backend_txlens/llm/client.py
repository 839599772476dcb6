"""
Uniform text-generation entry point used by the explainer and the tutor.

Wraps the process-wide provider with default generation parameters and logs
every call. Errors are raised as GenerationError; substituting fallbacks is
the caller's job.
"""

from __future__ import annotations

import time

from backend_txlens.core.exceptions import GenerationError
from backend_txlens.llm.providers import GenerationConfig, Message, TextProvider
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)


class TextGenerationClient:
    def __init__(self, provider: TextProvider, default_config: GenerationConfig | None = None) -> None:
        self._provider = provider
        self._default_config = default_config or GenerationConfig()

    @property
    def provider_name(self) -> str:
        return self._provider.name

    async def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        """Single-prompt generation."""
        return await self.chat([{"role": "user", "content": prompt}], config)

    async def chat(self, messages: list[Message], config: GenerationConfig | None = None) -> str:
        cfg = config or self._default_config
        started = time.perf_counter()
        try:
            text = await self._provider.complete(messages, cfg)
        except GenerationError as e:
            logger.warning(
                "llm_generation_failed",
                provider=self._provider.name,
                error=str(e),
            )
            raise
        logger.debug(
            "llm_generation_done",
            provider=self._provider.name,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            chars=len(text),
        )
        return text
