"""
Transaction explainer package.

Turns a TransactionRecord into an ExplanationResult: balance deltas,
classification, generated prose with canned fallbacks, fee comparison.
"""

from backend_txlens.explainer.models import ExplanationResult
from backend_txlens.explainer.programs import classify
from backend_txlens.explainer.transformer import TransactionTransformer

__all__ = ["ExplanationResult", "TransactionTransformer", "classify"]
