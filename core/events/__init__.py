"""
Ledger Event Bus — Public API
===============================
The journal records what happened. The bus tells whoever listens.
"""

from core.events.dispatcher import dispatch, dispatch_all
from core.events.errors import (
    DuplicateSubscription,
    InvalidSubscriptionType,
    SubscriptionError,
)
from core.events.models import LedgerEvent
from core.events.registry import ALL_EVENTS, SubscriberRegistry

__all__ = [
    "ALL_EVENTS",
    "LedgerEvent",
    "dispatch",
    "dispatch_all",
    "SubscriberRegistry",
    "SubscriptionError",
    "InvalidSubscriptionType",
    "DuplicateSubscription",
]
