"""
Market-data models: token metadata, price entries, and the resolved AssetInfo.

Prices are Decimal so USD conversions format exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


def to_decimal(value: Any) -> Decimal | None:
    """Convert a JSON number/string to Decimal; None when absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def _to_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class TokenMetadata:
    """Token listing entry as returned by the recent/search endpoints. Cached; never mutated."""

    id: str
    symbol: str
    name: str
    icon: str
    decimals: int
    usd_price: Decimal | None = None

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "TokenMetadata":
        return cls(
            id=str(item["id"]),
            symbol=str(item.get("symbol") or item["id"]),
            name=str(item.get("name") or item["id"]),
            icon=str(item.get("icon") or ""),
            decimals=_to_int(item.get("decimals")) or 0,
            usd_price=to_decimal(item.get("usdPrice")),
        )


@dataclass(frozen=True)
class PriceEntry:
    """One entry of the bulk price response."""

    usd_price: Decimal | None
    decimals: int | None = None
    block_id: int | None = None
    price_change_24h: Decimal | None = None

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "PriceEntry":
        return cls(
            usd_price=to_decimal(item.get("usdPrice")),
            decimals=_to_int(item.get("decimals")),
            block_id=_to_int(item.get("blockId")),
            price_change_24h=to_decimal(item.get("priceChange24h")),
        )


@dataclass(frozen=True)
class AssetInfo:
    """Display-ready token info: symbol/name/icon plus current USD price."""

    mint: str
    symbol: str
    name: str
    icon: str
    decimals: int
    price: Decimal

    @classmethod
    def from_metadata(cls, token: TokenMetadata, price_entry: PriceEntry | None) -> "AssetInfo":
        price = None
        if price_entry is not None:
            price = price_entry.usd_price
        if price is None:
            price = token.usd_price
        return cls(
            mint=token.id,
            symbol=token.symbol,
            name=token.name,
            icon=token.icon,
            decimals=token.decimals,
            price=price if price is not None else Decimal(0),
        )

    @classmethod
    def synthetic(cls, mint: str, price_entry: PriceEntry | None) -> "AssetInfo":
        """Placeholder when no listing knows the mint: identifier as symbol, price from feed or 0."""
        price = price_entry.usd_price if price_entry is not None else None
        decimals = price_entry.decimals if price_entry is not None else None
        return cls(
            mint=mint,
            symbol=mint,
            name=mint,
            icon="",
            decimals=decimals if decimals is not None else 9,
            price=price if price is not None else Decimal(0),
        )
