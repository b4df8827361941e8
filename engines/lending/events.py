"""
Ledger Lending Engine — Event Types and Payload Builders
==========================================================
Engine: Lending
Borrow / renew / return / penalty lifecycle.

lending.penalty.accrued.v1 is the outward notification other
systems subscribe to: it carries the participant, the item and
the incremental penalty amount.
"""

from __future__ import annotations

from datetime import datetime

from core.commands.base import Command


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

LENDING_ITEM_BORROWED_V1 = "lending.item.borrowed.v1"
LENDING_LOAN_RENEWED_V1 = "lending.loan.renewed.v1"
LENDING_ITEM_RETURNED_V1 = "lending.item.returned.v1"
LENDING_PENALTY_ACCRUED_V1 = "lending.penalty.accrued.v1"
LENDING_PENALTY_PAID_V1 = "lending.penalty.paid.v1"

LENDING_EVENT_TYPES = (
    LENDING_ITEM_BORROWED_V1,
    LENDING_LOAN_RENEWED_V1,
    LENDING_ITEM_RETURNED_V1,
    LENDING_PENALTY_ACCRUED_V1,
    LENDING_PENALTY_PAID_V1,
)

# Primary event per command; a late return also emits LENDING_PENALTY_ACCRUED_V1.
COMMAND_TO_EVENT_TYPE = {
    "lending.item.borrow.request": LENDING_ITEM_BORROWED_V1,
    "lending.loan.renew.request": LENDING_LOAN_RENEWED_V1,
    "lending.item.return.request": LENDING_ITEM_RETURNED_V1,
    "lending.penalty.pay.request": LENDING_PENALTY_PAID_V1,
}


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def _base_payload(command: Command) -> dict:
    return {
        "participant": command.actor_id,
        "command_id": str(command.command_id),
        "correlation_id": str(command.correlation_id),
    }


def build_item_borrowed_payload(command: Command, loan_due: datetime) -> dict:
    payload = _base_payload(command)
    payload.update({
        "item_id": command.payload["item_id"],
        "loan_start": command.issued_at.isoformat(),
        "loan_due": loan_due.isoformat(),
    })
    return payload


def build_loan_renewed_payload(
    command: Command, item_id: int, previous_due: datetime, loan_due: datetime,
) -> dict:
    payload = _base_payload(command)
    payload.update({
        "item_id": item_id,
        "previous_due": previous_due.isoformat(),
        "loan_due": loan_due.isoformat(),
        "renewed_at": command.issued_at.isoformat(),
    })
    return payload


def build_penalty_accrued_payload(
    command: Command, item_id: int, overdue_units: int, amount: int, balance: int,
) -> dict:
    payload = _base_payload(command)
    payload.update({
        "item_id": item_id,
        "overdue_units": overdue_units,
        "amount": amount,
        "balance": balance,
        "accrued_at": command.issued_at.isoformat(),
    })
    return payload


def build_item_returned_payload(command: Command, item_id: int, late: bool) -> dict:
    payload = _base_payload(command)
    payload.update({
        "item_id": item_id,
        "late": late,
        "returned_at": command.issued_at.isoformat(),
    })
    return payload


def build_penalty_paid_payload(command: Command, amount: int) -> dict:
    payload = _base_payload(command)
    payload.update({
        "amount": amount,
        "paid_at": command.issued_at.isoformat(),
    })
    return payload
