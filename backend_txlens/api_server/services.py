"""
Process-wide service container.

Built once in the FastAPI lifespan from Settings and a shared
httpx.AsyncClient; tests build one directly with fakes.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from fastapi import Request

from backend_txlens.config.env import PROVIDERS
from backend_txlens.config.settings import Settings
from backend_txlens.explainer.transformer import TransactionTransformer
from backend_txlens.ledger.client import LedgerClient
from backend_txlens.llm.client import TextGenerationClient
from backend_txlens.llm.providers import build_provider
from backend_txlens.market.cache import TokenMetadataCache
from backend_txlens.market.client import MarketDataClient
from backend_txlens.tutor.chat import Tutor


@dataclass
class Services:
    """
    generator, transformer and tutor are None when the configured provider
    name is unknown; handlers check settings.provider_configured() first.
    """

    settings: Settings
    ledger: LedgerClient
    market: MarketDataClient
    generator: TextGenerationClient | None
    transformer: TransactionTransformer | None
    tutor: Tutor | None


def build_services(
    settings: Settings,
    http_client: httpx.AsyncClient,
    cache: TokenMetadataCache | None = None,
) -> Services:
    ledger = LedgerClient(settings.solana_rpc_url, http_client)
    market = MarketDataClient(settings.jupiter_api_url, http_client, cache=cache)
    generator = None
    transformer = None
    tutor = None
    if settings.active_llm in PROVIDERS:
        generator = TextGenerationClient(build_provider(settings, http_client))
        transformer = TransactionTransformer(market, generator)
        tutor = Tutor(generator)
    return Services(
        settings=settings,
        ledger=ledger,
        market=market,
        generator=generator,
        transformer=transformer,
        tutor=tutor,
    )


def get_services(request: Request) -> Services:
    """Dependency: services attached to the app at startup."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialised; app lifespan has not run")
    return services
