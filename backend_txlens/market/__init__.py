"""
Market-data package: token metadata (cached) and USD prices from Jupiter.
"""

from backend_txlens.market.cache import TokenMetadataCache
from backend_txlens.market.client import FALLBACK_SOL_PRICE_USD, SOL_MINT, MarketDataClient
from backend_txlens.market.models import AssetInfo, PriceEntry, TokenMetadata

__all__ = [
    "AssetInfo",
    "FALLBACK_SOL_PRICE_USD",
    "MarketDataClient",
    "PriceEntry",
    "SOL_MINT",
    "TokenMetadata",
    "TokenMetadataCache",
]
