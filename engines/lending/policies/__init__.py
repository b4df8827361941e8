"""
Ledger Lending Engine — Policies
==================================
State-machine guards for the caller's loan. Order inside each
policy tuple is the order in which failures are reported.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.time.temporal import is_past


def caller_must_be_enrolled_policy(command: Command, state, access) -> Optional[RejectionReason]:
    return access.require_enrolled_participant(command.actor_id)


def item_must_exist_policy(command: Command, state, access) -> Optional[RejectionReason]:
    item_id = command.payload["item_id"]
    if state.live_item(item_id) is None:
        return RejectionReason(
            code=ReasonCode.NOT_FOUND,
            message=f"Item {item_id} does not exist.",
            policy_name="item_must_exist_policy",
        )
    return None


def no_outstanding_penalty_policy(command: Command, state, access) -> Optional[RejectionReason]:
    record = state.participant(command.actor_id)
    if record.penalty_balance > 0:
        return RejectionReason(
            code=ReasonCode.PENALTY_OUTSTANDING,
            message=f"'{command.actor_id}' owes {record.penalty_balance} in penalties.",
            policy_name="no_outstanding_penalty_policy",
        )
    return None


def item_must_be_available_policy(command: Command, state, access) -> Optional[RejectionReason]:
    item_id = command.payload["item_id"]
    if state.live_item(item_id).borrowed:
        return RejectionReason(
            code=ReasonCode.ALREADY_BORROWED,
            message=f"Item {item_id} is already on loan.",
            policy_name="item_must_be_available_policy",
        )
    return None


def caller_not_on_hold_policy(command: Command, state, access) -> Optional[RejectionReason]:
    if state.participant(command.actor_id).has_hold:
        return RejectionReason(
            code=ReasonCode.ON_HOLD,
            message=f"'{command.actor_id}' is on hold after a late return.",
            policy_name="caller_not_on_hold_policy",
        )
    return None


def caller_without_loan_policy(command: Command, state, access) -> Optional[RejectionReason]:
    """One item per participant at a time."""
    record = state.participant(command.actor_id)
    if record.has_active_loan:
        return RejectionReason(
            code=ReasonCode.HAS_ACTIVE_LOAN,
            message=f"'{command.actor_id}' already has item {record.active_item_id} on loan.",
            policy_name="caller_without_loan_policy",
        )
    return None


def caller_must_have_loan_policy(command: Command, state, access) -> Optional[RejectionReason]:
    if not state.participant(command.actor_id).has_active_loan:
        return RejectionReason(
            code=ReasonCode.NO_ACTIVE_LOAN,
            message=f"'{command.actor_id}' has nothing on loan.",
            policy_name="caller_must_have_loan_policy",
        )
    return None


def loan_not_overdue_policy(command: Command, state, access) -> Optional[RejectionReason]:
    record = state.participant(command.actor_id)
    if is_past(record.loan_due, command.issued_at):
        return RejectionReason(
            code=ReasonCode.OVERDUE,
            message=(
                f"Loan of item {record.active_item_id} was due "
                f"{record.loan_due.isoformat()}; overdue loans cannot be renewed."
            ),
            policy_name="loan_not_overdue_policy",
        )
    return None


def caller_must_owe_penalty_policy(command: Command, state, access) -> Optional[RejectionReason]:
    if state.participant(command.actor_id).penalty_balance <= 0:
        return RejectionReason(
            code=ReasonCode.NOTHING_TO_PAY,
            message=f"'{command.actor_id}' has no penalty to pay.",
            policy_name="caller_must_owe_penalty_policy",
        )
    return None


BORROW_POLICIES = (
    caller_must_be_enrolled_policy,
    item_must_exist_policy,
    no_outstanding_penalty_policy,
    item_must_be_available_policy,
    caller_not_on_hold_policy,
    caller_without_loan_policy,
)

RENEW_POLICIES = (
    caller_must_be_enrolled_policy,
    caller_must_have_loan_policy,
    loan_not_overdue_policy,
)

RETURN_POLICIES = (
    caller_must_be_enrolled_policy,
    caller_must_have_loan_policy,
)

PAY_PENALTY_POLICIES = (
    caller_must_be_enrolled_policy,
    caller_must_owe_penalty_policy,
)
