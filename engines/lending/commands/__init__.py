"""
Ledger Lending Engine — Request Commands
==========================================
Loan lifecycle requests. The caller of every lending command is
the participant acting on their own loan.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.commands.base import Command, build_command


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

LENDING_ITEM_BORROW_REQUEST = "lending.item.borrow.request"
LENDING_LOAN_RENEW_REQUEST = "lending.loan.renew.request"
LENDING_ITEM_RETURN_REQUEST = "lending.item.return.request"
LENDING_PENALTY_PAY_REQUEST = "lending.penalty.pay.request"

LENDING_COMMAND_TYPES = frozenset({
    LENDING_ITEM_BORROW_REQUEST,
    LENDING_LOAN_RENEW_REQUEST,
    LENDING_ITEM_RETURN_REQUEST,
    LENDING_PENALTY_PAY_REQUEST,
})


def _lending_command(
    command_type: str,
    payload: dict,
    actor_id: str,
    issued_at: datetime,
    correlation_id: Optional[uuid.UUID],
) -> Command:
    return build_command(
        command_type=command_type,
        actor_id=actor_id,
        payload=payload,
        issued_at=issued_at,
        source_engine="lending",
        correlation_id=correlation_id,
    )


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BorrowItemRequest:
    item_id: int

    def __post_init__(self):
        if isinstance(self.item_id, bool) or not isinstance(self.item_id, int) or self.item_id < 0:
            raise ValueError("item_id must be a non-negative integer.")

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return _lending_command(
            LENDING_ITEM_BORROW_REQUEST,
            {"item_id": self.item_id},
            actor_id,
            issued_at,
            correlation_id,
        )


@dataclass(frozen=True)
class RenewLoanRequest:
    """Extend the caller's current loan by one lease duration."""

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return _lending_command(LENDING_LOAN_RENEW_REQUEST, {}, actor_id, issued_at, correlation_id)


@dataclass(frozen=True)
class ReturnItemRequest:
    """Hand back the caller's current item."""

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return _lending_command(LENDING_ITEM_RETURN_REQUEST, {}, actor_id, issued_at, correlation_id)


@dataclass(frozen=True)
class PayPenaltyRequest:
    """Settle the caller's whole penalty balance and lift the hold."""

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return _lending_command(LENDING_PENALTY_PAY_REQUEST, {}, actor_id, issued_at, correlation_id)
