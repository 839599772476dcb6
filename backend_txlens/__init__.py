"""
Backend txlens: Solana transaction explainer.

Fetches a confirmed Solana transaction, resolves token metadata and prices,
and turns it into a structured explanation (beginner and developer prose,
steps, programs, transfers, balance changes). Also hosts a conversational
Solana tutor over the same text-generation providers.
"""

__version__ = "2.0.0"
