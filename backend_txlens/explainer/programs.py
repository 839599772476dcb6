"""
Known Solana programs, transaction classification and step templates.

Classification is a fixed-priority scan over the distinct program ids a
transaction invokes: an aggregator swap usually also calls the Token and
System programs, so earlier rules must win.
"""

from __future__ import annotations

from collections.abc import Iterable

from solders.system_program import ID as _SYSTEM_PROGRAM
from spl.token.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID as _ASSOCIATED_TOKEN_PROGRAM,
    TOKEN_2022_PROGRAM_ID as _TOKEN_2022_PROGRAM,
    TOKEN_PROGRAM_ID as _TOKEN_PROGRAM,
)

SYSTEM_PROGRAM_ID = str(_SYSTEM_PROGRAM)
TOKEN_PROGRAM_ID = str(_TOKEN_PROGRAM)
TOKEN_2022_PROGRAM_ID = str(_TOKEN_2022_PROGRAM)
ASSOCIATED_TOKEN_PROGRAM_ID = str(_ASSOCIATED_TOKEN_PROGRAM)
JUPITER_V4_PROGRAM_ID = "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB"
JUPITER_V6_PROGRAM_ID = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"
STAKE_PROGRAM_ID = "Stake11111111111111111111111111111111111111"
VOTE_PROGRAM_ID = "Vote111111111111111111111111111111111111111"

UNKNOWN_PROGRAM = "Unknown Program"

PROGRAM_NAMES: dict[str, str] = {
    SYSTEM_PROGRAM_ID: "System Program",
    "ComputeBudget111111111111111111111111111111": "Compute Budget Program",
    TOKEN_PROGRAM_ID: "Token Program",
    ASSOCIATED_TOKEN_PROGRAM_ID: "Associated Token Program",
    JUPITER_V4_PROGRAM_ID: "Jupiter Aggregator v4",
    JUPITER_V6_PROGRAM_ID: "Jupiter Aggregator v6",
    STAKE_PROGRAM_ID: "Stake Program",
    VOTE_PROGRAM_ID: "Vote Program",
    "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8": "Raydium AMM",
    "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc": "Orca Whirlpool",
    "CAMMCzo5YL8w4VFF8KVHrK22GGUsp5VTaW7grrKgrWqK": "Raydium Concentrated Liquidity",
    "Ed25519SigVerify111111111111111111111111111": "Ed25519 Program",
    "KeccakSecp256k11111111111111111111111111111": "Secp256k1 Program",
    "Sysvar1nstructions1111111111111111111111111": "Sysvar Instructions",
    "SysvarRent111111111111111111111111111111111": "Sysvar Rent",
    "SysvarC1ock11111111111111111111111111111111": "Sysvar Clock",
    "SysvarRecentB1ockHashes11111111111111111111": "Sysvar Recent Blockhashes",
    "SysvarEpochSchedu1e111111111111111111111111": "Sysvar Epoch Schedule",
    "SysvarFees111111111111111111111111111111111": "Sysvar Fees",
    "SysvarStakeHistory1111111111111111111111111": "Sysvar Stake History",
    "BPFLoaderUpgradeab1e11111111111111111111111": "BPF Loader Upgradeable",
    TOKEN_2022_PROGRAM_ID: "Token-2022 Program",
}

TOKEN_SWAP = "Token Swap"
TOKEN_TRANSFER = "Token Transfer"
STAKE = "Stake"
VOTE = "Vote"
SOL_TRANSFER = "SOL Transfer"
UNKNOWN = "Unknown"

# First match wins.
CLASSIFICATION_RULES: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({JUPITER_V4_PROGRAM_ID, JUPITER_V6_PROGRAM_ID}), TOKEN_SWAP),
    (frozenset({TOKEN_PROGRAM_ID}), TOKEN_TRANSFER),
    (frozenset({STAKE_PROGRAM_ID}), STAKE),
    (frozenset({VOTE_PROGRAM_ID}), VOTE),
    (frozenset({SYSTEM_PROGRAM_ID}), SOL_TRANSFER),
)

STEP_TITLES: dict[str, tuple[str, ...]] = {
    TOKEN_SWAP: ("Initialize Swap", "Token Account Check", "Route Calculation", "Execute Swap"),
    TOKEN_TRANSFER: ("Initialize Transfer", "Verify Accounts", "Execute Transfer"),
}
DEFAULT_STEP_TITLES = ("Initialize Transaction", "Process Instructions", "Confirm Transaction")


def program_name(program_id: str) -> str:
    return PROGRAM_NAMES.get(program_id, UNKNOWN_PROGRAM)


def classify(program_ids: Iterable[str]) -> str:
    """Map the set of invoked programs to a transaction type label."""
    invoked = set(program_ids)
    for programs, label in CLASSIFICATION_RULES:
        if invoked & programs:
            return label
    return UNKNOWN


def step_titles(tx_type: str) -> tuple[str, ...]:
    return STEP_TITLES.get(tx_type, DEFAULT_STEP_TITLES)
