"""
Conversational Solana tutor.

Stateless: the client sends the full history on every call. The reply is
post-processed to pull out a short list of related concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from backend_txlens.llm.client import TextGenerationClient
from backend_txlens.llm.providers import GenerationConfig, Message
from backend_txlens.tutor.prompt import SYSTEM_PROMPT
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)

TUTOR_GENERATION = GenerationConfig(temperature=0.7, max_tokens=2000)
MAX_RELATED_CONCEPTS = 3
MAX_CONCEPT_LEN = 50

# Checked in order; only the first matching line is used.
CONCEPT_PATTERNS = (
    re.compile(r"related concepts?:?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"you might also want to learn about:?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"next steps?:?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"explore:?\s*([^\n]+)", re.IGNORECASE),
)

KEYWORD_CONCEPTS = (
    ("account", ("Program Derived Addresses", "Account rent")),
    ("transaction", ("Transaction fees", "Blockhash")),
    ("program", ("Anchor framework", "Cross-Program Invocations")),
    ("wallet", ("Keypairs", "Signing transactions")),
    ("token", ("Token Program", "Associated Token Accounts")),
)


@dataclass
class TutorReply:
    response: str
    related_concepts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"response": self.response, "relatedConcepts": self.related_concepts}


def filter_messages(messages: Any) -> list[Message]:
    """Keep user/assistant messages with non-empty string content."""
    out: list[Message] = []
    for msg in messages or []:
        if not isinstance(msg, dict):
            continue
        role = msg.get("role")
        content = msg.get("content")
        if role in ("user", "assistant") and isinstance(content, str) and content:
            out.append({"role": role, "content": content})
    return out


def parse_ai_response(text: str) -> TutorReply:
    """Split a tutor reply into body text and up to three related concepts."""
    response = text
    concepts: list[str] = []

    for pattern in CONCEPT_PATTERNS:
        match = pattern.search(text)
        if match:
            parts = (c.strip() for c in re.split(r"[,;]", match.group(1)))
            concepts.extend(c for c in parts if 0 < len(c) < MAX_CONCEPT_LEN)
            response = pattern.sub("", response, count=1).strip()
            break

    if not concepts:
        lowered = text.lower()
        for keyword, suggestions in KEYWORD_CONCEPTS:
            if keyword in lowered:
                concepts.extend(suggestions)

    return TutorReply(response=response.strip(), related_concepts=concepts[:MAX_RELATED_CONCEPTS])


class Tutor:
    def __init__(self, generator: TextGenerationClient) -> None:
        self._generator = generator

    async def reply(self, messages: list[Message]) -> TutorReply:
        """Raises GenerationError; the API layer turns it into a 500 with an apology text."""
        history: list[Message] = [{"role": "system", "content": SYSTEM_PROMPT}, *messages]
        text = await self._generator.chat(history, TUTOR_GENERATION)
        reply = parse_ai_response(text)
        logger.info(
            "tutor_reply_generated",
            turns=len(messages),
            related_concepts=len(reply.related_concepts),
        )
        return reply
