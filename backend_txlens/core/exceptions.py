"""
Application-level exceptions.

Hard failures (bad input, missing provider credential, transaction not found,
ledger unreachable) propagate to the API layer and become distinct HTTP
responses. GenerationError is soft: the explainer catches it and substitutes
a canned fallback.
"""

from __future__ import annotations


class TxLensError(Exception):
    """Base class for all txlens errors."""


class InvalidSignatureError(TxLensError, ValueError):
    """Input is not a syntactically plausible transaction signature."""


class ProviderNotConfiguredError(TxLensError):
    """Active text-generation provider is unknown or has no credential."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        name = provider.upper()
        super().__init__(
            f"{name} API key not configured. Please set {name}_API_KEY in environment variables."
        )


class TransactionNotFoundError(TxLensError):
    """Ledger returned no record (unknown signature or not yet confirmed)."""

    def __init__(self, signature: str) -> None:
        self.signature = signature
        super().__init__(f"Transaction not found: {signature}")


class LedgerUnavailableError(TxLensError):
    """RPC transport failure, non-success status, or JSON-RPC error member."""


class GenerationError(TxLensError):
    """Text-generation call failed: missing key, bad status, or malformed body."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"{provider} API error: {message}")
