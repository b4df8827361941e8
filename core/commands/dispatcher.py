"""
Ledger Command Layer — Policy Evaluation
==========================================
Evaluate an engine's policies for a Command, in declared order.

Policies are callables:
    (Command, LedgerState, AccessControl) → Optional[RejectionReason]
Returning None means the policy passes. The first RejectionReason
wins and the remaining policies are not consulted, so the order of
a policy tuple is the order in which failures are reported.

This module DOES NOT:
- Mutate state
- Journal anything
- Dispatch the event bus

It only decides.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from core.commands.base import Command
from core.commands.errors import raise_rejection
from core.commands.rejection import RejectionReason

if TYPE_CHECKING:
    from core.permissions.access import AccessControl
    from core.state.store import LedgerState

logger = logging.getLogger("ledger.commands")


PolicyEvaluator = Callable[
    [Command, "LedgerState", "AccessControl"],
    Optional[RejectionReason],
]


def first_rejection(
    command: Command,
    policies: Iterable[PolicyEvaluator],
    state: "LedgerState",
    access: "AccessControl",
) -> Optional[RejectionReason]:
    for policy in policies:
        reason = policy(command, state, access)
        if reason is not None:
            logger.debug(
                f"Policy {reason.policy_name} rejected {command.command_type} "
                f"(command_id: {command.command_id}): {reason.code}"
            )
            return reason
    return None


def enforce_policies(
    command: Command,
    policies: Iterable[PolicyEvaluator],
    state: "LedgerState",
    access: "AccessControl",
) -> None:
    """Raise the typed CommandRejectedError for the first failing policy."""
    reason = first_rejection(command, policies, state, access)
    if reason is not None:
        raise_rejection(reason, command.command_type)
