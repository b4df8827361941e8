"""
Ledger Core Config — Public API
=================================
Lending constants, fixed at construction.
"""

from core.config.policy import (
    DEFAULT_FINE_RATE_PER_UNIT,
    DEFAULT_INITIAL_ITEM_ID,
    DEFAULT_LEASE_DURATION,
    DEFAULT_OVERDUE_UNIT,
    LendingPolicy,
)

__all__ = [
    "LendingPolicy",
    "DEFAULT_FINE_RATE_PER_UNIT",
    "DEFAULT_LEASE_DURATION",
    "DEFAULT_OVERDUE_UNIT",
    "DEFAULT_INITIAL_ITEM_ID",
]
