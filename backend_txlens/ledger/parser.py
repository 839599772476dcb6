"""
Solana transaction parser: raw getTransaction payloads to TransactionRecord.

Handles both "jsonParsed" (account keys as objects, programId on each
instruction) and plain "json" (string keys, programIdIndex, loadedAddresses
for versioned transactions). Purely structural; no pricing or classification.
"""

from __future__ import annotations

from typing import Any

from backend_txlens.ledger.models import Instruction, TokenBalance, TransactionRecord
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)


def _pubkey_str(value: Any) -> str:
    """Normalize an account key entry (str or {"pubkey": ...}) to base58."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        pk = value.get("pubkey")
        return str(pk) if pk is not None else ""
    return str(value)


def _get_account_keys(
    message: dict[str, Any],
    meta: dict[str, Any] | None = None,
) -> list[str]:
    """
    Resolve accountKeys to a list of base58 strings (handles json vs jsonParsed).
    For "json" encoding of versioned transactions, appends meta.loadedAddresses
    (writable + readonly); jsonParsed already lists them inline.
    """
    keys = message.get("accountKeys")
    if not keys:
        return []
    out = [_pubkey_str(k) for k in keys]
    if isinstance(keys[0], str):
        loaded = (meta or {}).get("loadedAddresses") or {}
        for role in ("writable", "readonly"):
            for addr in loaded.get(role) or []:
                out.append(_pubkey_str(addr))
    return out


def _get_message_and_meta(raw: dict[str, Any]) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    """Return (transaction.message, meta) from getTransaction-style result."""
    tx_obj = raw.get("transaction")
    if not tx_obj or not isinstance(tx_obj, dict):
        return None, None
    message = tx_obj.get("message")
    if not message or not isinstance(message, dict):
        return None, None
    meta = raw.get("meta")
    if not isinstance(meta, dict):
        meta = None
    return message, meta


def _parse_instruction(ix: dict[str, Any], account_keys: list[str]) -> Instruction | None:
    program_id = _pubkey_str(ix.get("programId"))
    if not program_id:
        idx = ix.get("programIdIndex")
        if isinstance(idx, int) and 0 <= idx < len(account_keys):
            program_id = account_keys[idx]
    if not program_id:
        return None
    return Instruction(program_id=program_id, program=ix.get("program"))


def _parse_balances(items: list[dict[str, Any]] | None) -> tuple[TokenBalance, ...]:
    out: list[TokenBalance] = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        try:
            out.append(TokenBalance.from_rpc_item(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("ledger_token_balance_skipped", error=str(e))
    return tuple(out)


def parse_transaction(raw: dict[str, Any], signature: str) -> TransactionRecord:
    """
    Parse a getTransaction result into a TransactionRecord.

    Only top-level instructions are kept; inner (CPI) instructions do not
    affect classification. Raises ValueError when message, meta or account
    keys are missing.
    """
    message, meta = _get_message_and_meta(raw)
    if not message or meta is None:
        raise ValueError("Invalid transaction structure")

    account_keys = _get_account_keys(message, meta)
    if not account_keys:
        raise ValueError("Invalid transaction structure")

    instructions: list[Instruction] = []
    for ix in message.get("instructions") or []:
        if not isinstance(ix, dict):
            continue
        parsed = _parse_instruction(ix, account_keys)
        if parsed is not None:
            instructions.append(parsed)

    block_time = raw.get("blockTime")
    if block_time is not None and not isinstance(block_time, int):
        try:
            block_time = int(block_time)
        except (TypeError, ValueError):
            block_time = None

    slot = raw.get("slot")

    return TransactionRecord(
        signature=signature,
        fee=int(meta.get("fee") or 0),
        account_keys=tuple(account_keys),
        instructions=tuple(instructions),
        pre_token_balances=_parse_balances(meta.get("preTokenBalances")),
        post_token_balances=_parse_balances(meta.get("postTokenBalances")),
        err=meta.get("err"),
        block_time=block_time,
        slot=int(slot) if slot is not None else None,
        log_messages=tuple(meta.get("logMessages") or ()),
    )
