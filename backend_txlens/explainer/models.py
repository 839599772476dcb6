"""
Explanation result schema.

Constructed once per request and serialized with camelCase keys via to_dict().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CREDIT = "credit"
DEBIT = "debit"
POOL_ACCOUNT = "Pool Account"


@dataclass(frozen=True)
class Step:
    title: str
    description: str
    time: str

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "time": self.time}


@dataclass(frozen=True)
class ProgramSummary:
    name: str
    description: str
    program_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "programId": self.program_id}


@dataclass(frozen=True)
class TokenTransfer:
    """
    One non-zero token balance delta. The non-owner side is always the
    POOL_ACCOUNT placeholder; the real counterparty is not resolved.
    """

    token: str
    amount: str
    """Signed, 6 decimals (e.g. "+1.500000")."""
    usd_value: str
    """"$" + 2 decimals; "$0.00" when price unknown."""
    from_: str
    to: str
    direction: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "amount": self.amount,
            "usdValue": self.usd_value,
            "from": self.from_,
            "to": self.to,
            "direction": self.direction,
        }


@dataclass(frozen=True)
class AccountChange:
    wallet: str
    change: str
    reason: str
    direction: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "wallet": self.wallet,
            "change": self.change,
            "reason": self.reason,
            "direction": self.direction,
            "type": self.type,
        }


@dataclass(frozen=True)
class FeeComparison:
    solana_fee: str
    ethereum_fee: str
    savings: str

    def to_dict(self) -> dict[str, Any]:
        return {"solanaFee": self.solana_fee, "ethereumFee": self.ethereum_fee, "savings": self.savings}


@dataclass(frozen=True)
class ExplanationResult:
    signature: str
    status: str
    timestamp: str
    fee_sol: str
    fee_usd: str
    type: str
    beginner_explanation: str
    developer_explanation: str
    fee_comparison: FeeComparison
    steps: list[Step] = field(default_factory=list)
    programs: list[ProgramSummary] = field(default_factory=list)
    token_transfers: list[TokenTransfer] = field(default_factory=list)
    account_changes: list[AccountChange] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "signature": self.signature,
            "status": self.status,
            "timestamp": self.timestamp,
            "fee": {"sol": self.fee_sol, "usd": self.fee_usd},
            "type": self.type,
            "explanations": {
                "beginner": self.beginner_explanation,
                "developer": self.developer_explanation,
            },
            "steps": [s.to_dict() for s in self.steps],
            "programs": [p.to_dict() for p in self.programs],
            "tokenTransfers": [t.to_dict() for t in self.token_transfers],
            "accountChanges": [c.to_dict() for c in self.account_changes],
            "feeComparison": self.fee_comparison.to_dict(),
        }
