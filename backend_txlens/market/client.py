"""
Jupiter market-data client: token metadata and USD prices.

Every operation degrades instead of failing: metadata falls back to a
synthetic AssetInfo, bulk prices fall back to an empty map, and the SOL
reference price falls back to a fixed constant. Failures are logged, never raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

import httpx
from spl.token.constants import WRAPPED_SOL_MINT

from backend_txlens.market.cache import TokenMetadataCache
from backend_txlens.market.models import AssetInfo, PriceEntry, TokenMetadata
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)

SOL_MINT = str(WRAPPED_SOL_MINT)
FALLBACK_SOL_PRICE_USD = Decimal(200)

RECENT_TOKENS_PATH = "/tokens/v2/recent"
SEARCH_TOKENS_PATH = "/tokens/v2/search"
PRICE_PATH = "/price/v3"


class MarketDataClient:
    """
    Read-through metadata cache in front of the Jupiter token and price APIs.

    The cache holds metadata only; prices are fetched per request via
    get_prices() and never cached.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        cache: TokenMetadataCache | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._cache = cache if cache is not None else TokenMetadataCache()

    @property
    def cache(self) -> TokenMetadataCache:
        return self._cache

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        resp = await self._http.get(f"{self._base_url}{path}", params=params)
        resp.raise_for_status()
        return resp.json()

    async def _load_recent_tokens(self) -> None:
        """Load the bulk recent-tokens listing once; a failed load still counts as loaded."""
        if self._cache.bulk_loaded:
            return
        try:
            items = await self._get_json(RECENT_TOKENS_PATH)
            tokens = [TokenMetadata.from_api(i) for i in items or [] if isinstance(i, dict) and i.get("id")]
            self._cache.put_many(tokens)
            logger.info("market_recent_tokens_loaded", count=len(tokens))
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("market_recent_tokens_failed", error=str(e))
        finally:
            self._cache.mark_bulk_loaded()

    async def _search_token(self, mint: str) -> TokenMetadata | None:
        try:
            items = await self._get_json(SEARCH_TOKENS_PATH, params={"query": mint})
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("market_token_search_failed", mint=mint, error=str(e))
            return None
        if not isinstance(items, list):
            logger.warning("market_token_search_unexpected_body", mint=mint, body_type=type(items).__name__)
            return None
        for item in items:
            if isinstance(item, dict) and item.get("id") == mint:
                try:
                    return TokenMetadata.from_api(item)
                except (KeyError, TypeError) as e:
                    logger.debug("market_token_search_bad_item", mint=mint, error=str(e))
                    return None
        return None

    async def get_asset_info(self, mint: str, price_entry: PriceEntry | None = None) -> AssetInfo:
        """
        Resolve display info for a mint: cache, then bulk listing, then search,
        then a synthetic placeholder. Never raises.
        """
        token = self._cache.get(mint)
        if token is None:
            await self._load_recent_tokens()
            token = self._cache.get(mint)
        if token is None:
            token = await self._search_token(mint)
            if token is not None:
                self._cache.put(token)
        if token is None:
            logger.info("market_asset_unknown", mint=mint)
            return AssetInfo.synthetic(mint, price_entry)
        return AssetInfo.from_metadata(token, price_entry)

    async def get_prices(self, mints: Iterable[str]) -> dict[str, PriceEntry]:
        """Bulk USD prices keyed by mint. Empty map on any failure; missing keys mean unknown price."""
        ids = list(dict.fromkeys(m for m in mints if m))
        if not ids:
            return {}
        try:
            data = await self._get_json(PRICE_PATH, params={"ids": ",".join(ids)})
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("market_prices_failed", mint_count=len(ids), error=str(e))
            return {}
        if not isinstance(data, dict):
            return {}
        out: dict[str, PriceEntry] = {}
        for mint, item in data.items():
            if isinstance(item, dict):
                out[mint] = PriceEntry.from_api(item)
        return out

    async def get_reference_price(self) -> Decimal:
        """USD price of SOL; FALLBACK_SOL_PRICE_USD when the feed is unavailable."""
        prices = await self.get_prices([SOL_MINT])
        entry = prices.get(SOL_MINT)
        if entry is None or entry.usd_price is None:
            logger.warning("market_sol_price_fallback", fallback=str(FALLBACK_SOL_PRICE_USD))
            return FALLBACK_SOL_PRICE_USD
        return entry.usd_price
