"""
Ledger Command Layer — Rejection Model
========================================
Why a command was refused, as data.

The same RejectionReason is written into the journal's
`<command>.rejected` record and attached to the CommandRejectedError
the caller receives, so the audit trail and the exception agree.
Given the same state and the same command, policies always produce
the same reason.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RejectionReason:
    """
    code:        One of ReasonCode (machine-readable).
    message:     Explanation for a human reader.
    policy_name: The policy function that refused the command.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        for name in ("code", "message", "policy_name"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"RejectionReason.{name} must be a non-empty string.")

    def to_dict(self) -> dict:
        return asdict(self)


class ReasonCode:
    # roles and enrollment
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_ROLE = "INVALID_ROLE"
    NOT_ENROLLED = "NOT_ENROLLED"

    # catalog
    NOT_FOUND = "NOT_FOUND"
    ITEM_BORROWED = "ITEM_BORROWED"

    # lending
    ALREADY_BORROWED = "ALREADY_BORROWED"
    ON_HOLD = "ON_HOLD"
    PENALTY_OUTSTANDING = "PENALTY_OUTSTANDING"
    HAS_ACTIVE_LOAN = "HAS_ACTIVE_LOAN"
    HAS_HOLD = "HAS_HOLD"
    NO_ACTIVE_LOAN = "NO_ACTIVE_LOAN"
    OVERDUE = "OVERDUE"
    NOTHING_TO_PAY = "NOTHING_TO_PAY"
