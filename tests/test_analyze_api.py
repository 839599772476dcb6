"""
Tests for the analyze endpoints (FastAPI TestClient, injected services).

Validation failures must be answered before any upstream call.
"""

from __future__ import annotations

import re
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from backend_txlens.api_server.server import create_app
from backend_txlens.api_server.services import build_services
from backend_txlens.config import Settings
from conftest import BONK_MINT, GROQ_HOST, JUPITER_URL, RPC_HOST, RPC_URL, SIGNATURE, swap_tx, token_balance

REQUEST_ID_RE = re.compile(r"^req_\d+_[0-9a-z]{7}$")


def _assert_error_envelope(resp, status_code: int, error: str) -> dict:
    assert resp.status_code == status_code
    body = resp.json()
    assert body["error"] == error
    assert REQUEST_ID_RE.match(body["requestId"])
    assert body["timestamp"].endswith("Z")
    assert resp.headers["X-Request-ID"] == body["requestId"]
    return body


def test_invalid_json_body(client, upstreams):
    resp = client.post("/analyze", content=b"{not json", headers={"Content-Type": "application/json"})
    _assert_error_envelope(resp, 400, "Invalid JSON in request body")
    assert upstreams.requests == []


def test_non_object_body(client):
    resp = client.post("/analyze", json=["signature"])
    _assert_error_envelope(resp, 400, "Invalid JSON in request body")


@pytest.mark.parametrize("payload", [{}, {"signature": ""}, {"signature": None}])
def test_missing_signature(client, upstreams, payload):
    resp = client.post("/analyze", json=payload)
    _assert_error_envelope(resp, 400, "Transaction signature is required")
    assert upstreams.requests == []


def test_invalid_signature_makes_no_upstream_call(client, upstreams):
    resp = client.post("/analyze", json={"signature": "abc"})
    _assert_error_envelope(
        resp,
        400,
        "Invalid Solana transaction signature format. "
        "Signature must be a base58-encoded string of 87-88 characters.",
    )
    assert upstreams.requests == []


def test_provider_not_configured(http_client, upstreams):
    settings = Settings(active_llm="groq", api_keys={}, solana_rpc_url=RPC_URL, jupiter_api_url=JUPITER_URL)
    with TestClient(create_app(build_services(settings, http_client))) as client:
        resp = client.post("/analyze", json={"signature": SIGNATURE})
    _assert_error_envelope(
        resp,
        500,
        "GROQ API key not configured. Please set GROQ_API_KEY in environment variables.",
    )
    assert upstreams.requests == []


def test_unknown_provider_is_not_configured(http_client, upstreams):
    settings = Settings(active_llm="mistral", api_keys={"mistral": "k"}, solana_rpc_url=RPC_URL, jupiter_api_url=JUPITER_URL)
    services = build_services(settings, http_client)
    assert services.transformer is None
    with TestClient(create_app(services)) as client:
        resp = client.post("/analyze", json={"signature": SIGNATURE})
    assert resp.status_code == 500
    assert resp.json()["error"].startswith("MISTRAL API key not configured")
    assert upstreams.requests == []


def test_transaction_not_found(client, upstreams):
    resp = client.post("/analyze", json={"signature": SIGNATURE})
    _assert_error_envelope(
        resp,
        404,
        "Transaction not found. The transaction may not exist or the network is experiencing issues.",
    )
    assert len(upstreams.requests_to(RPC_HOST)) == 1
    assert upstreams.requests_to(GROQ_HOST) == []


def test_ledger_unavailable_is_internal_error(client, upstreams):
    upstreams.rpc_error = {"code": -32603, "message": "Internal error"}
    resp = client.post("/analyze", json={"signature": SIGNATURE})
    body = _assert_error_envelope(resp, 500, "Internal server error occurred while analyzing transaction")
    assert "Internal error" in body["details"]
    assert re.match(r"^\d+ms$", body["processingTime"])


def test_unexpected_exception_is_internal_error(client, services):
    with patch.object(services.ledger, "fetch_transaction", AsyncMock(side_effect=RuntimeError("boom"))) as fetch:
        resp = client.post("/analyze", json={"signature": SIGNATURE})
    fetch.assert_awaited_once_with(SIGNATURE)
    body = _assert_error_envelope(resp, 500, "Internal server error occurred while analyzing transaction")
    assert body["details"] == "boom"


def test_analyze_success(client, upstreams):
    upstreams.transactions[SIGNATURE] = swap_tx()
    resp = client.post("/analyze", json={"signature": f" {SIGNATURE} "})
    assert resp.status_code == 200
    body = resp.json()
    assert body["signature"] == SIGNATURE
    assert body["type"] == "Token Swap"
    assert body["fee"] == {"sol": "0.000005000", "usd": "0.0010"}
    assert body["metadata"] == {"apiVersion": "1.0.0", "solanaCluster": "mainnet-beta", "aiModel": "groq"}
    assert REQUEST_ID_RE.match(body["requestId"])
    assert body["analyzedAt"].endswith("Z")
    assert resp.headers["X-Request-ID"] == body["requestId"]
    assert resp.headers["X-Processing-Time"] == body["processingTime"]
    assert set(body) >= {
        "explanations",
        "steps",
        "programs",
        "tokenTransfers",
        "accountChanges",
        "feeComparison",
        "timestamp",
        "status",
    }


def test_analyze_success_with_generation_failure(client, upstreams):
    """Generation failures degrade to canned text; the request still succeeds."""
    upstreams.transactions[SIGNATURE] = swap_tx()
    upstreams.llm_status = 429
    resp = client.post("/analyze", json={"signature": SIGNATURE})
    assert resp.status_code == 200
    assert resp.json()["steps"][0]["description"] == "Initialize Swap - Step 1"


def test_request_ids_are_unique(client):
    ids = {client.post("/analyze", json={}).json()["requestId"] for _ in range(5)}
    assert len(ids) == 5


def test_analyze_info(client, upstreams):
    resp = client.get("/analyze")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["service"] == "Solana AI Transaction Analyzer"
    assert body["llmProvider"] == "groq"
    assert body["endpoints"]["analyze"]["method"] == "POST"
    assert upstreams.requests == []


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("Z")


def test_structured_llm_content_falls_back(client, upstreams):
    """A provider answering with a list instead of text degrades to canned text, not a 500."""
    upstreams.transactions[SIGNATURE] = swap_tx()
    upstreams.llm_reply = [{"type": "text", "text": "hi"}]
    resp = client.post("/analyze", json={"signature": SIGNATURE})
    assert resp.status_code == 200
    body = resp.json()
    assert body["explanations"]["beginner"].startswith("This transaction was a token swap on Solana!")
    assert body["steps"][0]["description"] == "Initialize Swap - Step 1"
    assert body["programs"][0]["description"] == "Jupiter Aggregator v6 - involved in this transaction"


def test_malformed_search_body_does_not_fail_request(client, upstreams):
    """Unlisted mint whose search answer is not a list: request succeeds with a synthetic token."""
    upstreams.transactions[SIGNATURE] = swap_tx(
        pre=[token_balance(3, BONK_MINT, 100_000, 5)],
        post=[token_balance(3, BONK_MINT, 50_000, 5)],
    )
    upstreams.search_results[BONK_MINT] = 42
    resp = client.post("/analyze", json={"signature": SIGNATURE})
    assert resp.status_code == 200
    [transfer] = resp.json()["tokenTransfers"]
    assert transfer["token"] == BONK_MINT
    assert transfer["usdValue"] == "$0.00"
