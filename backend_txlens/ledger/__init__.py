"""
Solana ledger package.

Fetches confirmed transactions over JSON-RPC and normalizes them into
immutable TransactionRecord objects for the explainer.
"""

from backend_txlens.ledger.client import LedgerClient
from backend_txlens.ledger.models import Instruction, TokenBalance, TransactionRecord
from backend_txlens.ledger.parser import parse_transaction
from backend_txlens.ledger.signature import is_valid_signature, validate_signature

__all__ = [
    "Instruction",
    "LedgerClient",
    "TokenBalance",
    "TransactionRecord",
    "is_valid_signature",
    "parse_transaction",
    "validate_signature",
]
