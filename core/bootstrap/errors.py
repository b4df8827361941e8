"""
Ledger Bootstrap — System Errors
==================================
If a ledger invariant is violated, the ledger must say so loudly.
"""


class SystemBootstrapError(Exception):
    """
    Raised when a ledger invariant does not hold.

    Carries the name of the violated invariant and a detail message.
    No fallback. No warning-only mode.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(f"LEDGER INVARIANT FAILURE — {invariant}: {detail}")
