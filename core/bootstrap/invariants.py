"""
Ledger Bootstrap — Invariant Checks
=====================================
Each function verifies one ledger law against a LedgerState.
If a check fails → SystemBootstrapError is raised.

These checks do NOT auto-fix anything. A ledger that silently
repairs itself hides the bug that broke it.
"""

import logging

from core.bootstrap.errors import SystemBootstrapError
from core.permissions.roles import Role
from core.state.models import TEXT_FIELDS

logger = logging.getLogger("ledger.bootstrap")


# ══════════════════════════════════════════════════════════════
# CHECK 1: Retired items are wiped and never on loan
# ══════════════════════════════════════════════════════════════

def check_item_invariants(state) -> None:
    for item_id, item in state.items.items():
        if item.item_id != item_id:
            raise SystemBootstrapError(
                invariant="ITEM_KEY",
                detail=f"Item stored under {item_id} claims id {item.item_id}.",
            )
        if item_id >= state.next_item_id:
            raise SystemBootstrapError(
                invariant="ITEM_ID_COUNTER",
                detail=f"Item {item_id} is not below the next id {state.next_item_id}.",
            )
        if item.exists:
            continue
        if item.borrowed:
            raise SystemBootstrapError(
                invariant="RETIRED_ITEM_BORROWED",
                detail=f"Retired item {item_id} is still marked borrowed.",
            )
        leftover = [name for name in TEXT_FIELDS if getattr(item, name)]
        if leftover:
            raise SystemBootstrapError(
                invariant="RETIRED_ITEM_FIELDS",
                detail=f"Retired item {item_id} still carries {', '.join(leftover)}.",
            )


# ══════════════════════════════════════════════════════════════
# CHECK 2: has_active_loan ⇔ the active item is borrowed by this participant
# ══════════════════════════════════════════════════════════════

def check_loan_invariants(state) -> None:
    holders = {}
    for record in state.participants.values():
        if record.penalty_balance < 0:
            raise SystemBootstrapError(
                invariant="NEGATIVE_PENALTY",
                detail=f"'{record.identity}' has balance {record.penalty_balance}.",
            )
        if not record.has_active_loan:
            if record.active_item_id is not None:
                raise SystemBootstrapError(
                    invariant="STALE_ACTIVE_ITEM",
                    detail=f"'{record.identity}' has no loan but points at item {record.active_item_id}.",
                )
            continue
        item = state.live_item(record.active_item_id)
        if item is None or not item.borrowed:
            raise SystemBootstrapError(
                invariant="LOAN_WITHOUT_BORROWED_ITEM",
                detail=f"'{record.identity}' holds item {record.active_item_id}, which is not on loan.",
            )
        if record.active_item_id in holders:
            raise SystemBootstrapError(
                invariant="ITEM_LOANED_TWICE",
                detail=(
                    f"Item {record.active_item_id} is on loan to both "
                    f"'{holders[record.active_item_id]}' and '{record.identity}'."
                ),
            )
        holders[record.active_item_id] = record.identity

    for item_id, item in state.items.items():
        if item.borrowed and item_id not in holders:
            raise SystemBootstrapError(
                invariant="ORPHAN_BORROWED_ITEM",
                detail=f"Item {item_id} is borrowed but no participant holds it.",
            )


# ══════════════════════════════════════════════════════════════
# CHECK 3: Registry, enrollment flags and role tags agree
# ══════════════════════════════════════════════════════════════

def check_registry_invariants(state) -> None:
    listed = state.registry.snapshot()
    if len(listed) != len(set(listed)):
        raise SystemBootstrapError(
            invariant="REGISTRY_DUPLICATES",
            detail=f"Registry lists an identity twice: {listed}.",
        )

    enrolled = {i for i, record in state.participants.items() if record.enrolled}
    if enrolled != set(listed):
        raise SystemBootstrapError(
            invariant="REGISTRY_MISMATCH",
            detail=f"Enrolled {sorted(enrolled)} but registry lists {sorted(listed)}.",
        )

    tagged = set(state.roles.holders(Role.PARTICIPANT))
    if tagged != enrolled:
        raise SystemBootstrapError(
            invariant="ROLE_TAG_MISMATCH",
            detail=f"Participant tags {sorted(tagged)} differ from enrolled {sorted(enrolled)}.",
        )

    if state.administrator in enrolled:
        raise SystemBootstrapError(
            invariant="ADMINISTRATOR_ENROLLED",
            detail="The administrator is enrolled as a participant.",
        )


def run_invariant_checks(state) -> None:
    """Run every check; the first violation propagates."""
    check_item_invariants(state)
    check_loan_invariants(state)
    check_registry_invariants(state)
    logger.debug("Ledger invariant checks passed.")
