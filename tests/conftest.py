"""
Pytest fixtures for txlens tests.

All upstreams (Solana RPC, Jupiter, Groq) are served by one in-memory
FakeUpstreams handler behind httpx.MockTransport, so the real clients,
parser and transformer run without network access.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

RPC_URL = "https://rpc.test"
JUPITER_URL = "https://jup.test"
RPC_HOST = "rpc.test"
JUPITER_HOST = "jup.test"
GROQ_HOST = "api.groq.com"

SIGNATURE = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"
WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
USDC_ACCOUNT = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
WSOL_ACCOUNT = "3Kz9qYnNCdjy2sfdDDJ3bMSKx9xbJ4rDPKzmpUTUbKWq"
NEW_ACCOUNT = "Hq5UrFJYvVgdHq9CNTXhJq8Lz6WkdLp3wR5RSPr2BXtn"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
SOL_MINT = "So11111111111111111111111111111111111111112"
BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"

SYSTEM_PROGRAM = "11111111111111111111111111111111"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
JUPITER_V6 = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"
STAKE_PROGRAM = "Stake11111111111111111111111111111111111111"
VOTE_PROGRAM = "Vote111111111111111111111111111111111111111"

BLOCK_TIME = 1700000000


def token_balance(index: int, mint: str, amount: int, decimals: int, owner: str | None = WALLET) -> dict[str, Any]:
    """One RPC pre/postTokenBalances item."""
    item: dict[str, Any] = {
        "accountIndex": index,
        "mint": mint,
        "programId": TOKEN_PROGRAM,
        "uiTokenAmount": {
            "amount": str(amount),
            "decimals": decimals,
            "uiAmount": amount / 10**decimals,
            "uiAmountString": str(amount / 10**decimals),
        },
    }
    if owner is not None:
        item["owner"] = owner
    return item


def build_raw_tx(
    program_ids: list[str],
    pre: list[dict[str, Any]] | None = None,
    post: list[dict[str, Any]] | None = None,
    fee: int = 5000,
    err: Any = None,
    block_time: int | None = BLOCK_TIME,
    extra_keys: list[str] | None = None,
) -> dict[str, Any]:
    """getTransaction result in jsonParsed encoding."""
    keys = [WALLET, USDC_ACCOUNT, WSOL_ACCOUNT, NEW_ACCOUNT, *(extra_keys or [])]
    for pid in program_ids:
        if pid not in keys:
            keys.append(pid)
    return {
        "slot": 250_000_000,
        "blockTime": block_time,
        "version": 0,
        "meta": {
            "err": err,
            "fee": fee,
            "preBalances": [0] * len(keys),
            "postBalances": [0] * len(keys),
            "preTokenBalances": pre or [],
            "postTokenBalances": post or [],
            "logMessages": [f"Program {pid} invoke [1]" for pid in program_ids],
        },
        "transaction": {
            "signatures": [SIGNATURE],
            "message": {
                "accountKeys": [
                    {"pubkey": k, "signer": i == 0, "writable": i < 4, "source": "transaction"}
                    for i, k in enumerate(keys)
                ],
                "instructions": [{"programId": pid, "accounts": [], "data": ""} for pid in program_ids],
                "recentBlockhash": "EkSnNWid2cvwEVnVx9aBqawnmiCNiDgp3gUdkDPTKN1N",
            },
        },
    }


def swap_tx(**overrides: Any) -> dict[str, Any]:
    """
    Jupiter swap: WALLET receives 1.5 USDC and spends 1 SOL (wrapped). A third
    token account is created by the transaction and has no pre balance.
    """
    params: dict[str, Any] = {
        "program_ids": [JUPITER_V6, TOKEN_PROGRAM, SYSTEM_PROGRAM],
        "pre": [
            token_balance(1, USDC_MINT, 1_000_000, 6),
            token_balance(2, SOL_MINT, 2_000_000_000, 9),
        ],
        "post": [
            token_balance(1, USDC_MINT, 2_500_000, 6),
            token_balance(2, SOL_MINT, 1_000_000_000, 9),
            token_balance(3, BONK_MINT, 42_000, 5),
        ],
    }
    params.update(overrides)
    return build_raw_tx(**params)


class FakeUpstreams:
    """Configurable responses for the three upstream services; records every request."""

    def __init__(self) -> None:
        self.transactions: dict[str, dict[str, Any] | None] = {}
        self.rpc_status = 200
        self.rpc_error: dict[str, Any] | None = None
        self.prices: dict[str, dict[str, Any]] = {
            SOL_MINT: {"usdPrice": 200, "decimals": 9, "blockId": 1, "priceChange24h": 1.5},
            USDC_MINT: {"usdPrice": 1.0, "decimals": 6, "blockId": 1, "priceChange24h": 0.01},
        }
        self.price_status = 200
        self.recent_tokens: list[dict[str, Any]] = [
            {"id": USDC_MINT, "symbol": "USDC", "name": "USD Coin", "icon": "https://icons.test/usdc.png", "decimals": 6, "usdPrice": 0.9998},
            {"id": SOL_MINT, "symbol": "SOL", "name": "Wrapped SOL", "icon": "https://icons.test/sol.png", "decimals": 9, "usdPrice": 199.5},
        ]
        self.recent_status = 200
        self.search_results: dict[str, Any] = {}
        self.search_status = 200
        self.llm_status = 200
        self.llm_reply = "Generated text."
        self.requests: list[httpx.Request] = []

    def requests_to(self, host: str, path: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.url.host == host and (path is None or r.url.path == path)
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host == RPC_HOST:
            return self._rpc(request)
        if host == JUPITER_HOST:
            return self._jupiter(request)
        if host == GROQ_HOST:
            return self._llm(request)
        return httpx.Response(404, json={"error": "unknown host"})

    def _rpc(self, request: httpx.Request) -> httpx.Response:
        if self.rpc_status != 200:
            return httpx.Response(self.rpc_status, text="upstream unavailable")
        body = json.loads(request.content)
        if self.rpc_error is not None:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": self.rpc_error})
        signature = body["params"][0]
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": body["id"], "result": self.transactions.get(signature)},
        )

    def _jupiter(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/price/v3":
            if self.price_status != 200:
                return httpx.Response(self.price_status, json={"error": "price feed down"})
            ids = request.url.params.get("ids", "").split(",")
            return httpx.Response(200, json={m: self.prices[m] for m in ids if m in self.prices})
        if path == "/tokens/v2/recent":
            if self.recent_status != 200:
                return httpx.Response(self.recent_status, json={"error": "listing down"})
            return httpx.Response(200, json=self.recent_tokens)
        if path == "/tokens/v2/search":
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"error": "search down"})
            query = request.url.params.get("query", "")
            return httpx.Response(200, json=self.search_results.get(query, []))
        return httpx.Response(404, json={"error": "not found"})

    def _llm(self, request: httpx.Request) -> httpx.Response:
        if self.llm_status != 200:
            return httpx.Response(self.llm_status, json={"error": {"message": "Rate limit reached"}})
        return httpx.Response(
            200,
            json={"choices": [{"index": 0, "message": {"role": "assistant", "content": self.llm_reply}}]},
        )


@pytest.fixture
def upstreams():
    return FakeUpstreams()


@pytest.fixture
def http_client(upstreams):
    """AsyncClient routed to FakeUpstreams; closed after the test."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstreams.handler))
    yield client
    asyncio.run(client.aclose())


@pytest.fixture
def settings():
    from backend_txlens.config import Settings

    return Settings(
        active_llm="groq",
        api_keys={"groq": "test-groq-key"},
        solana_rpc_url=RPC_URL,
        jupiter_api_url=JUPITER_URL,
    )


@pytest.fixture
def services(settings, http_client):
    from backend_txlens.api_server.services import build_services

    return build_services(settings, http_client)


@pytest.fixture
def client(services):
    """FastAPI TestClient over an app with injected services."""
    from fastapi.testclient import TestClient

    from backend_txlens.api_server.server import create_app

    with TestClient(create_app(services)) as test_client:
        yield test_client
