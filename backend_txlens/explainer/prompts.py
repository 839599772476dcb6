"""
Prompt templates for transaction explanations, step and program descriptions.

Each prompt carries only data derived from the ledger record and market
prices; the model is asked for short, bounded output.
"""

from __future__ import annotations

from collections.abc import Sequence

from backend_txlens.explainer.models import TokenTransfer


def _transfers_text(transfers: Sequence[TokenTransfer], worth: bool) -> str:
    if not transfers:
        return "None"
    if worth:
        return ", ".join(f"{t.amount} {t.token} (worth {t.usd_value})" for t in transfers)
    return ", ".join(f"{t.amount} {t.token} ({t.usd_value})" for t in transfers)


def beginner_prompt(
    tx_type: str,
    transfers: Sequence[TokenTransfer],
    program_names: Sequence[str],
    usd_fee: str,
) -> str:
    return f"""You are explaining a Solana blockchain transaction to someone who knows nothing about crypto. Be friendly, simple, and use everyday analogies.

Transaction Type: {tx_type}
Token Transfers: {_transfers_text(transfers, worth=True)}
Programs Used: {", ".join(program_names)}
Transaction Fee: ${usd_fee}

Write a beginner-friendly explanation (2-3 sentences) that explains what happened in this transaction. Use simple language and relatable analogies. Make it exciting but accurate!"""


def developer_prompt(
    tx_type: str,
    transfers: Sequence[TokenTransfer],
    programs: Sequence[tuple[str, str]],
    usd_fee: str,
) -> str:
    """programs is a sequence of (name, program_id)."""
    programs_text = ", ".join(f"{name} ({pid})" for name, pid in programs)
    return f"""You are explaining a Solana blockchain transaction to an experienced blockchain developer. Be technical and precise.

Transaction Type: {tx_type}
Token Transfers: {_transfers_text(transfers, worth=False)}
Programs Invoked: {programs_text}
Transaction Fee: ${usd_fee}

Write a technical explanation (2-3 sentences) that describes the transaction mechanics, program invocations, and technical details. Use proper blockchain terminology."""


def step_prompt(title: str, tx_type: str, number: int, total: int) -> str:
    return f"""You are describing step {number} of {total} in a {tx_type} transaction on Solana blockchain.

Step Title: {title}

Write a brief, clear description (1 sentence) of what happens in this step. Be specific and informative."""


def program_prompt(name: str, program_id: str) -> str:
    return f"""You are describing a Solana program to a general audience.

Program Name: {name}
Program ID: {program_id}

Write a brief, friendly description (1 sentence) of what this program does on Solana. Make it easy to understand."""
