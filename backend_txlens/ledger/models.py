"""
Data models for ledger records.

Immutable, RPC-shape-agnostic view of one confirmed transaction: fee, account
keys, top-level instructions and per-account token balances before and after
execution. Owned by the explainer for the duration of one request; never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Instruction:
    """A top-level instruction reduced to the program that executed it."""

    program_id: str
    """Base58 address of the invoked program."""
    program: str | None = None
    """Parser name reported by jsonParsed (e.g. "spl-token"); None if raw."""


@dataclass(frozen=True)
class TokenBalance:
    """
    One entry of meta.preTokenBalances / meta.postTokenBalances.

    Keyed by (account_index, mint); amount is the raw integer in minor units.
    """

    account_index: int
    mint: str
    amount: int
    decimals: int
    owner: str | None = None

    @property
    def key(self) -> tuple[int, str]:
        return (self.account_index, self.mint)

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "TokenBalance":
        """Build from a single RPC token balance item."""
        ui = item.get("uiTokenAmount") or {}
        return cls(
            account_index=int(item["accountIndex"]),
            mint=str(item["mint"]),
            amount=int(ui.get("amount") or 0),
            decimals=int(ui.get("decimals") or 0),
            owner=item.get("owner") or None,
        )


@dataclass(frozen=True)
class TransactionRecord:
    """
    Decoded confirmed transaction.

    account_keys follow message order (fee payer first). err mirrors meta.err:
    None on success, RPC error object otherwise.
    """

    signature: str
    fee: int
    account_keys: tuple[str, ...]
    instructions: tuple[Instruction, ...]
    pre_token_balances: tuple[TokenBalance, ...] = ()
    post_token_balances: tuple[TokenBalance, ...] = ()
    err: Any = None
    block_time: int | None = None
    slot: int | None = None
    log_messages: tuple[str, ...] = field(default=(), compare=False)

    @property
    def succeeded(self) -> bool:
        return self.err is None

    @property
    def fee_payer(self) -> str:
        return self.account_keys[0] if self.account_keys else ""

    def program_ids(self) -> list[str]:
        """Distinct invoking program addresses in first-seen order."""
        seen: dict[str, None] = {}
        for ix in self.instructions:
            if ix.program_id:
                seen.setdefault(ix.program_id, None)
        return list(seen)

    def account_key(self, index: int) -> str:
        if 0 <= index < len(self.account_keys):
            return self.account_keys[index]
        return ""
