"""
Ledger State — Public API
"""

from core.state.models import TEXT_FIELDS, Item, Participant
from core.state.registry import ParticipantRegistry
from core.state.store import LedgerState

__all__ = [
    "TEXT_FIELDS",
    "Item",
    "Participant",
    "ParticipantRegistry",
    "LedgerState",
]
