"""
Ledger Catalog Engine — Policies
==================================
Staff-only catalog maintenance; loaned items are frozen.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason


def caller_must_be_staff_policy(command: Command, state, access) -> Optional[RejectionReason]:
    """Administrator or librarian."""
    return access.require_administrator_or_librarian(command.actor_id)


def item_must_exist_policy(command: Command, state, access) -> Optional[RejectionReason]:
    item_id = command.payload["item_id"]
    if state.live_item(item_id) is None:
        return RejectionReason(
            code=ReasonCode.NOT_FOUND,
            message=f"Item {item_id} does not exist.",
            policy_name="item_must_exist_policy",
        )
    return None


def item_must_not_be_borrowed_policy(command: Command, state, access) -> Optional[RejectionReason]:
    item_id = command.payload["item_id"]
    item = state.live_item(item_id)
    if item is not None and item.borrowed:
        return RejectionReason(
            code=ReasonCode.ITEM_BORROWED,
            message=f"Item {item_id} is out on loan and cannot be changed.",
            policy_name="item_must_not_be_borrowed_policy",
        )
    return None


ADD_ITEM_POLICIES = (caller_must_be_staff_policy,)

MUTATE_ITEM_POLICIES = (
    caller_must_be_staff_policy,
    item_must_exist_policy,
    item_must_not_be_borrowed_policy,
)
