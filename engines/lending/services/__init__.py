"""
Ledger Lending Engine — Application Service
=============================================
Per-participant state machine:

    Idle ──borrow──▶ OnLoan ──return──▶ Idle (+ Held if returned late)
                      │  ▲
                      └──┘ renew (only while not overdue)

    Held ──pay_penalty──▶ Idle

A late return sets the hold and accrues the penalty BEFORE the loan
fields are cleared, so the accrual still sees the item and due date.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from core.commands.base import Command
from core.commands.bus import EngineResult
from core.commands.dispatcher import enforce_policies
from core.commands.errors import raise_rejection
from core.commands.rejection import ReasonCode, RejectionReason
from core.config.policy import LendingPolicy
from core.events.models import LedgerEvent
from core.permissions.access import AccessControl
from core.state.store import LedgerState
from core.time.temporal import extend, is_past, whole_units_between
from engines.lending.commands import (
    LENDING_COMMAND_TYPES,
    LENDING_ITEM_BORROW_REQUEST,
    LENDING_ITEM_RETURN_REQUEST,
    LENDING_LOAN_RENEW_REQUEST,
    LENDING_PENALTY_PAY_REQUEST,
)
from engines.lending.events import (
    COMMAND_TO_EVENT_TYPE,
    LENDING_ITEM_BORROWED_V1,
    LENDING_ITEM_RETURNED_V1,
    LENDING_LOAN_RENEWED_V1,
    LENDING_PENALTY_ACCRUED_V1,
    LENDING_PENALTY_PAID_V1,
    build_item_borrowed_payload,
    build_item_returned_payload,
    build_loan_renewed_payload,
    build_penalty_accrued_payload,
    build_penalty_paid_payload,
)
from engines.lending.policies import (
    BORROW_POLICIES,
    PAY_PENALTY_POLICIES,
    RENEW_POLICIES,
    RETURN_POLICIES,
)

logger = logging.getLogger("ledger.lending")


POLICIES = {
    LENDING_ITEM_BORROW_REQUEST: BORROW_POLICIES,
    LENDING_LOAN_RENEW_REQUEST: RENEW_POLICIES,
    LENDING_ITEM_RETURN_REQUEST: RETURN_POLICIES,
    LENDING_PENALTY_PAY_REQUEST: PAY_PENALTY_POLICIES,
}


@dataclass(frozen=True)
class OverdueLoan:
    participant: str
    item_id: int
    loan_due: datetime
    overdue_units: int
    projected_penalty: int


class LendingService:
    """Lending engine service. Only this service flips Item.borrowed."""

    command_types = LENDING_COMMAND_TYPES

    def __init__(
        self,
        *,
        state: LedgerState,
        access: AccessControl,
        policy: LendingPolicy,
    ):
        self._state = state
        self._access = access
        self._policy = policy

    @property
    def policy(self) -> LendingPolicy:
        return self._policy

    # ══════════════════════════════════════════════════════════
    # COMMANDS
    # ══════════════════════════════════════════════════════════

    def execute(self, command: Command) -> EngineResult:
        event_type = COMMAND_TO_EVENT_TYPE[command.command_type]

        enforce_policies(command, POLICIES[command.command_type], self._state, self._access)

        events = self._build_events(command, event_type)
        for event in events:
            self.apply(event)
        return EngineResult(events=tuple(events))

    def _build_events(self, command: Command, event_type: str) -> List[LedgerEvent]:
        now = command.issued_at
        record = self._state.participant(command.actor_id)

        if event_type == LENDING_ITEM_BORROWED_V1:
            due = now + self._policy.lease_duration
            payloads = [(event_type, build_item_borrowed_payload(command, due))]

        elif event_type == LENDING_LOAN_RENEWED_V1:
            due = extend(record.loan_due, self._policy.lease_duration)
            payloads = [(
                event_type,
                build_loan_renewed_payload(command, record.active_item_id, record.loan_due, due),
            )]

        elif event_type == LENDING_ITEM_RETURNED_V1:
            late = is_past(record.loan_due, now)
            payloads = []
            if late:
                units = whole_units_between(record.loan_due, now, self._policy.overdue_unit)
                amount = self._policy.penalty_for(units)
                payloads.append((
                    LENDING_PENALTY_ACCRUED_V1,
                    build_penalty_accrued_payload(
                        command,
                        record.active_item_id,
                        units,
                        amount,
                        record.penalty_balance + amount,
                    ),
                ))
            payloads.append((
                event_type,
                build_item_returned_payload(command, record.active_item_id, late),
            ))

        else:
            payloads = [(event_type, build_penalty_paid_payload(command, record.penalty_balance))]

        return [LedgerEvent.from_command(command, et, payload) for et, payload in payloads]

    # ══════════════════════════════════════════════════════════
    # STATE APPLICATION
    # ══════════════════════════════════════════════════════════

    def apply(self, event: LedgerEvent) -> None:
        payload = event.payload
        record = self._state.participant(payload["participant"])

        if event.event_type == LENDING_ITEM_BORROWED_V1:
            item = self._state.items[payload["item_id"]]
            item.borrowed = True
            record.start_loan(
                payload["item_id"],
                datetime.fromisoformat(payload["loan_start"]),
                datetime.fromisoformat(payload["loan_due"]),
            )
            logger.info(
                f"'{record.identity}' borrowed item {item.item_id}, due {payload['loan_due']}"
            )

        elif event.event_type == LENDING_LOAN_RENEWED_V1:
            record.loan_due = datetime.fromisoformat(payload["loan_due"])
            logger.info(f"'{record.identity}' renewed item {payload['item_id']} until {payload['loan_due']}")

        elif event.event_type == LENDING_PENALTY_ACCRUED_V1:
            record.has_hold = True
            record.penalty_balance += payload["amount"]
            logger.info(
                f"Penalty accrued for '{record.identity}' on item {payload['item_id']}: "
                f"{payload['amount']} ({payload['overdue_units']} unit(s) late), "
                f"balance {record.penalty_balance}"
            )

        elif event.event_type == LENDING_ITEM_RETURNED_V1:
            self._state.items[payload["item_id"]].borrowed = False
            record.end_loan()
            logger.info(f"'{record.identity}' returned item {payload['item_id']}")

        elif event.event_type == LENDING_PENALTY_PAID_V1:
            record.penalty_balance = 0
            record.has_hold = False
            logger.info(f"'{record.identity}' paid penalty of {payload['amount']}")

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def is_overdue(self, identity: str, now: datetime) -> bool:
        """True when identity's active loan is past due at `now`."""
        record = self._state.participant(identity)
        if record is None or not record.has_active_loan:
            raise_rejection(RejectionReason(
                code=ReasonCode.NO_ACTIVE_LOAN,
                message=f"'{identity}' has nothing on loan.",
                policy_name="LendingService.is_overdue",
            ))
        return record.is_overdue(now)

    def overdue_loans(self, now: datetime) -> Tuple[OverdueLoan, ...]:
        """Every active loan past due at `now`, with the penalty a return would accrue."""
        overdue = []
        for record in self._state.active_loans():
            if not record.is_overdue(now):
                continue
            units = whole_units_between(record.loan_due, now, self._policy.overdue_unit)
            overdue.append(OverdueLoan(
                participant=record.identity,
                item_id=record.active_item_id,
                loan_due=record.loan_due,
                overdue_units=units,
                projected_penalty=self._policy.penalty_for(units),
            ))
        return tuple(sorted(overdue, key=lambda loan: (loan.loan_due, loan.participant)))
