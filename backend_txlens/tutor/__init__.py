"""
Solana tutor package: chat replies over the active text-generation provider.
"""

from backend_txlens.tutor.chat import Tutor, TutorReply, filter_messages, parse_ai_response
from backend_txlens.tutor.prompt import LEARNING_PATHS

__all__ = ["LEARNING_PATHS", "Tutor", "TutorReply", "filter_messages", "parse_ai_response"]
