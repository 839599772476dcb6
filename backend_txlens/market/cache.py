"""
Process-lifetime token metadata cache.

Append-only, no eviction. Owned by whoever builds the MarketDataClient (the
API lifespan in production, tests otherwise) so it can be replaced with an
empty or pre-seeded instance. Inserts of the same mint are idempotent
overwrites, so concurrent first-writes are harmless.
"""

from __future__ import annotations

from collections.abc import Iterable

from backend_txlens.market.models import TokenMetadata


class TokenMetadataCache:
    """Mint -> TokenMetadata map plus a flag for the one-time bulk listing load."""

    def __init__(self, tokens: Iterable[TokenMetadata] = ()) -> None:
        self._tokens: dict[str, TokenMetadata] = {}
        self._bulk_loaded = False
        self.put_many(tokens)

    def __contains__(self, mint: object) -> bool:
        return mint in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def get(self, mint: str) -> TokenMetadata | None:
        return self._tokens.get(mint)

    def put(self, token: TokenMetadata) -> None:
        self._tokens[token.id] = token

    def put_many(self, tokens: Iterable[TokenMetadata]) -> None:
        for token in tokens:
            self.put(token)

    @property
    def bulk_loaded(self) -> bool:
        return self._bulk_loaded

    def mark_bulk_loaded(self) -> None:
        self._bulk_loaded = True

    def clear(self) -> None:
        """Drop all entries and allow the bulk listing to load again."""
        self._tokens.clear()
        self._bulk_loaded = False
