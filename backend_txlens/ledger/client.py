"""
Solana ledger client: fetch one confirmed, parsed transaction by signature.

Responsibilities:
- Issue getTransaction over JSON-RPC on a shared httpx.AsyncClient
  (jsonParsed encoding, maxSupportedTransactionVersion 0, confirmed commitment).
- Map "result: null" to TransactionNotFoundError and every transport or RPC
  failure to LedgerUnavailableError. No retries; failures propagate immediately.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from backend_txlens.core.exceptions import LedgerUnavailableError, TransactionNotFoundError
from backend_txlens.ledger.models import TransactionRecord
from backend_txlens.ledger.parser import parse_transaction
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)

COMMITMENT = "confirmed"
MAX_SUPPORTED_TRANSACTION_VERSION = 0

# JSON-RPC request id counter
_request_ids = itertools.count(1)


def _build_rpc_body(signature: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": next(_request_ids),
        "method": "getTransaction",
        "params": [
            signature,
            {
                "encoding": "jsonParsed",
                "maxSupportedTransactionVersion": MAX_SUPPORTED_TRANSACTION_VERSION,
                "commitment": COMMITMENT,
            },
        ],
    }


class LedgerClient:
    """
    Read-only Solana RPC client for parsed transactions.

    The httpx client is owned by the caller (the API lifespan) so connections
    are pooled across requests.
    """

    def __init__(self, rpc_url: str, http_client: httpx.AsyncClient) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self._rpc_url = rpc_url.strip()
        self._http = http_client

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    async def fetch_transaction(self, signature: str) -> TransactionRecord:
        """Return the decoded transaction; raise TransactionNotFoundError or LedgerUnavailableError."""
        raw = await self._rpc_get_transaction(signature)
        if raw is None:
            logger.info("ledger_transaction_not_found", signature=signature[:16] + "...")
            raise TransactionNotFoundError(signature)
        record = parse_transaction(raw, signature)
        logger.info(
            "ledger_transaction_fetched",
            signature=signature[:16] + "...",
            slot=record.slot,
            fee=record.fee,
            instruction_count=len(record.instructions),
        )
        return record

    async def _rpc_get_transaction(self, signature: str) -> dict[str, Any] | None:
        """Perform getTransaction JSON-RPC call; raise on transport or RPC error."""
        body = _build_rpc_body(signature)
        try:
            resp = await self._http.post(self._rpc_url, json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.warning("ledger_rpc_failed", error=str(e))
            raise LedgerUnavailableError(f"Solana RPC request failed: {e}") from e
        except ValueError as e:
            raise LedgerUnavailableError(f"Solana RPC returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise LedgerUnavailableError("Solana RPC returned an unexpected payload")
        if "error" in data:
            err = data["error"]
            if isinstance(err, dict):
                message = f"{err.get('message', err)} (code={err.get('code')})"
            else:
                message = str(err)
            raise LedgerUnavailableError(f"Solana RPC error: {message}")
        result = data.get("result")
        if result is not None and not isinstance(result, dict):
            raise LedgerUnavailableError("Solana RPC returned an unexpected result")
        return result
