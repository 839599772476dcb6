"""
Canned explanations used when text generation fails or returns nothing.
"""

from __future__ import annotations

from backend_txlens.explainer.programs import (
    SOL_TRANSFER,
    STAKE,
    TOKEN_SWAP,
    TOKEN_TRANSFER,
    UNKNOWN,
    VOTE,
)

FALLBACK_EXPLANATIONS: dict[str, dict[str, str]] = {
    TOKEN_SWAP: {
        "beginner": (
            "This transaction was a token swap on Solana! Think of it like exchanging money at a "
            "currency exchange booth. Someone traded their tokens through a decentralized exchange, "
            "which automatically found the best price across multiple trading pools. The whole "
            "process took just a few seconds and cost less than a penny in fees!"
        ),
        "developer": (
            "This transaction executed a swap instruction through Jupiter's aggregator program. "
            "The transaction involved multiple program invocations including Token Program calls "
            "for account transfers, associated token account creation, and price oracle queries. "
            "The swap utilized a multi-hop route through various AMMs to optimize for minimal "
            "slippage and best execution price."
        ),
    },
    TOKEN_TRANSFER: {
        "beginner": (
            "This was a simple token transfer on Solana - like sending a digital payment to someone. "
            "The tokens moved directly from one wallet to another, secured by Solana's blockchain. "
            "The transaction was fast and cheap!"
        ),
        "developer": (
            "This transaction executed a direct SPL token transfer using the Token Program. The "
            "instruction included account validation, balance checks, and atomic transfer execution "
            "with proper authority verification."
        ),
    },
    SOL_TRANSFER: {
        "beginner": (
            "This was a SOL transfer - Solana's native cryptocurrency moving from one wallet to "
            "another. It's like sending digital cash instantly and securely!"
        ),
        "developer": (
            "This transaction executed a native SOL transfer using the System Program with proper "
            "signature verification and balance checks."
        ),
    },
    STAKE: {
        "beginner": (
            "This transaction staked SOL tokens! Staking is like putting your money in a savings "
            "account - you lock up your SOL to help secure the network and earn rewards over time."
        ),
        "developer": (
            "This transaction created or modified a stake account, delegating SOL to a validator "
            "for network security and rewards."
        ),
    },
    VOTE: {
        "beginner": (
            "This was a vote transaction - a validator confirming which blocks it agrees with. "
            "It's part of how Solana's network keeps everyone in sync!"
        ),
        "developer": (
            "This transaction invoked the Vote Program to record a validator's vote on recent slots, "
            "contributing to consensus and fork choice."
        ),
    },
    UNKNOWN: {
        "beginner": (
            "This transaction performed an operation on the Solana blockchain. Transactions on "
            "Solana are fast, cheap, and secure!"
        ),
        "developer": "This transaction executed program instructions on Solana with atomic execution guarantees.",
    },
}


def fallback_explanation(tx_type: str, audience: str) -> str:
    """audience is "beginner" or "developer"; unknown types use the generic bucket."""
    bucket = FALLBACK_EXPLANATIONS.get(tx_type) or FALLBACK_EXPLANATIONS[UNKNOWN]
    return bucket[audience]


def fallback_step_description(title: str, number: int) -> str:
    return f"{title} - Step {number}"


def fallback_program_description(name: str) -> str:
    return f"{name} - involved in this transaction"
