"""
Text-generation package: four interchangeable providers behind one client.
"""

from backend_txlens.llm.client import TextGenerationClient
from backend_txlens.llm.providers import (
    ChatCompletionsProvider,
    GeminiProvider,
    GenerationConfig,
    TextProvider,
    build_provider,
)

__all__ = [
    "ChatCompletionsProvider",
    "GeminiProvider",
    "GenerationConfig",
    "TextGenerationClient",
    "TextProvider",
    "build_provider",
]
