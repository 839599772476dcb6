"""
Syntactic check for transaction signatures, done before any network work.

A Solana signature is 64 bytes, which base58-encodes to 87 or 88 characters.
"""

from __future__ import annotations

import re
from typing import Any

from backend_txlens.core.exceptions import InvalidSignatureError

BASE58_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]+$")
MIN_SIGNATURE_LEN = 87
MAX_SIGNATURE_LEN = 88


def is_valid_signature(signature: Any) -> bool:
    if not isinstance(signature, str):
        return False
    sig = signature.strip()
    if not (MIN_SIGNATURE_LEN <= len(sig) <= MAX_SIGNATURE_LEN):
        return False
    return bool(BASE58_RE.match(sig))


def validate_signature(signature: Any) -> str:
    """Return the trimmed signature or raise InvalidSignatureError."""
    if not is_valid_signature(signature):
        raise InvalidSignatureError(
            "Invalid Solana transaction signature format. "
            "Signature must be a base58-encoded string of 87-88 characters."
        )
    return signature.strip()
