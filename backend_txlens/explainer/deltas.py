"""
Token balance deltas between pre- and post-execution balances.

Only post entries with a matching pre entry (same account index and mint)
produce a delta: token accounts created by the transaction have no pre entry
and are not reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from backend_txlens.explainer.formatting import raw_to_ui
from backend_txlens.ledger.models import TransactionRecord


@dataclass(frozen=True)
class BalanceDelta:
    account_index: int
    mint: str
    owner: str
    raw_change: int
    decimals: int

    @property
    def amount(self) -> Decimal:
        """Signed change in UI units."""
        return raw_to_ui(self.raw_change, self.decimals)

    @property
    def is_credit(self) -> bool:
        return self.raw_change > 0


def extract_balance_deltas(record: TransactionRecord) -> list[BalanceDelta]:
    """Non-zero deltas in post-balance order."""
    pre_by_key = {b.key: b for b in record.pre_token_balances}
    out: list[BalanceDelta] = []
    for post in record.post_token_balances:
        pre = pre_by_key.get(post.key)
        if pre is None:
            continue
        change = post.amount - pre.amount
        if change == 0:
            continue
        out.append(
            BalanceDelta(
                account_index=post.account_index,
                mint=post.mint,
                owner=post.owner or record.account_key(post.account_index),
                raw_change=change,
                decimals=post.decimals,
            )
        )
    return out


def distinct_mints(record: TransactionRecord) -> list[str]:
    """Distinct post-balance mints in first-seen order (one bulk price query per record)."""
    return list(dict.fromkeys(b.mint for b in record.post_token_balances))
