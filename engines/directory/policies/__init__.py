"""
Ledger Directory Engine — Policies
====================================
Role exclusivity and safe unenrollment.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.permissions.roles import Role


def caller_must_be_administrator_policy(command: Command, state, access) -> Optional[RejectionReason]:
    return access.require_administrator(command.actor_id)


def caller_must_be_staff_policy(command: Command, state, access) -> Optional[RejectionReason]:
    return access.require_administrator_or_librarian(command.actor_id)


def librarian_candidate_policy(command: Command, state, access) -> Optional[RejectionReason]:
    """An enrolled participant or the administrator cannot become a librarian."""
    identity = command.payload["identity"]
    role = access.role_of(identity)
    if role in (Role.ADMINISTRATOR, Role.PARTICIPANT):
        return RejectionReason(
            code=ReasonCode.INVALID_ROLE,
            message=f"'{identity}' already holds role {role.name}.",
            policy_name="librarian_candidate_policy",
        )
    return None


def participant_candidate_policy(command: Command, state, access) -> Optional[RejectionReason]:
    """A librarian or the administrator cannot enroll as a participant."""
    identity = command.payload["identity"]
    role = access.role_of(identity)
    if role in (Role.ADMINISTRATOR, Role.LIBRARIAN):
        return RejectionReason(
            code=ReasonCode.INVALID_ROLE,
            message=f"'{identity}' already holds role {role.name}.",
            policy_name="participant_candidate_policy",
        )
    return None


def target_must_be_enrolled_policy(command: Command, state, access) -> Optional[RejectionReason]:
    return access.require_enrolled_participant(command.payload["identity"])


def target_without_active_loan_policy(command: Command, state, access) -> Optional[RejectionReason]:
    identity = command.payload["identity"]
    record = state.participant(identity)
    if record is not None and record.has_active_loan:
        return RejectionReason(
            code=ReasonCode.HAS_ACTIVE_LOAN,
            message=f"'{identity}' still has item {record.active_item_id} on loan.",
            policy_name="target_without_active_loan_policy",
        )
    return None


def target_without_hold_policy(command: Command, state, access) -> Optional[RejectionReason]:
    identity = command.payload["identity"]
    record = state.participant(identity)
    if record is not None and record.has_hold:
        return RejectionReason(
            code=ReasonCode.HAS_HOLD,
            message=f"'{identity}' is on hold after a late return.",
            policy_name="target_without_hold_policy",
        )
    return None


ENROLL_LIBRARIAN_POLICIES = (
    caller_must_be_administrator_policy,
    librarian_candidate_policy,
)

UNENROLL_LIBRARIAN_POLICIES = (caller_must_be_administrator_policy,)

ENROLL_PARTICIPANT_POLICIES = (
    caller_must_be_staff_policy,
    participant_candidate_policy,
)

UNENROLL_PARTICIPANT_POLICIES = (
    caller_must_be_staff_policy,
    target_must_be_enrolled_policy,
    target_without_active_loan_policy,
    target_without_hold_policy,
)
