"""
Ledger Bootstrap — System Wiring
==================================
Builds one ledger: shared state, access control, the three engine
services, the command bus and the subscriber registry, and exposes
every operation as a method taking the caller identity explicitly.

Usage:
    ledger = build_ledger("admin")
    ledger.enroll_participant("admin", "alice")
    item_id = ledger.add_item("admin", "Book A", "Author", "Fiction")
    ledger.borrow("alice", item_id)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Tuple

from core.bootstrap.invariants import run_invariant_checks
from core.commands.bus import CommandBus, CommandResult
from core.config.policy import LendingPolicy
from core.events.models import LedgerEvent
from core.events.registry import SubscriberRegistry
from core.permissions.access import AccessControl
from core.permissions.roles import Role
from core.state.models import Item, Participant
from core.state.store import LedgerState
from core.time.clock import Clock, SystemClock
from engines.catalog.commands import (
    AddItemRequest,
    RetireItemRequest,
    UpdateItemFieldRequest,
)
from engines.catalog.services import CatalogService
from engines.directory.commands import (
    EnrollLibrarianRequest,
    EnrollParticipantRequest,
    UnenrollLibrarianRequest,
    UnenrollParticipantRequest,
)
from engines.directory.services import DirectoryService
from engines.lending.commands import (
    BorrowItemRequest,
    PayPenaltyRequest,
    RenewLoanRequest,
    ReturnItemRequest,
)
from engines.lending.services import LendingService, OverdueLoan

logger = logging.getLogger("ledger.bootstrap")


class LedgerSystem:
    def __init__(
        self,
        administrator: str,
        policy: Optional[LendingPolicy] = None,
        clock: Optional[Clock] = None,
    ):
        self._policy = policy or LendingPolicy()
        self._clock = clock or SystemClock()
        self._state = LedgerState(administrator, self._policy.initial_item_id)
        self._access = AccessControl(self._state)
        self._subscribers = SubscriberRegistry()

        self._catalog = CatalogService(state=self._state, access=self._access)
        self._directory = DirectoryService(state=self._state, access=self._access)
        self._lending = LendingService(
            state=self._state, access=self._access, policy=self._policy,
        )

        self._bus = CommandBus(journal=self._state, subscribers=self._subscribers)
        for service in (self._catalog, self._directory, self._lending):
            self._bus.register_engine(service.command_types, service)

        logger.info(
            f"Ledger ready (administrator: {administrator}, "
            f"lease: {self._policy.lease_duration}, "
            f"fine: {self._policy.fine_rate_per_unit}/{self._policy.overdue_unit})"
        )

    # ── Wiring internals ──────────────────────────────────────

    def _now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return self._clock.now_utc()
        if not isinstance(now, datetime) or now.tzinfo is None:
            raise ValueError("now must be a timezone-aware datetime.")
        return now

    def _submit(self, request, caller: str, now: Optional[datetime]) -> CommandResult:
        command = request.to_command(actor_id=caller, issued_at=self._now(now))
        return self._bus.handle(command)

    @property
    def administrator(self) -> str:
        return self._state.administrator

    @property
    def policy(self) -> LendingPolicy:
        return self._policy

    @property
    def state(self) -> LedgerState:
        return self._state

    # ══════════════════════════════════════════════════════════
    # DIRECTORY
    # ══════════════════════════════════════════════════════════

    def enroll_librarian(self, caller: str, identity: str, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(EnrollLibrarianRequest(identity), caller, now)

    def unenroll_librarian(self, caller: str, identity: str, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(UnenrollLibrarianRequest(identity), caller, now)

    def enroll_participant(self, caller: str, identity: str, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(EnrollParticipantRequest(identity), caller, now)

    def unenroll_participant(self, caller: str, identity: str, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(UnenrollParticipantRequest(identity), caller, now)

    def list_participants(self) -> Tuple[str, ...]:
        """Enrolled identities. Order is not stable across unenrollments."""
        return self._bus.read(self._directory.list_participants)

    def role_of(self, identity: str) -> Role:
        return self._bus.read(lambda: self._access.role_of(identity))

    # ══════════════════════════════════════════════════════════
    # CATALOG
    # ══════════════════════════════════════════════════════════

    def add_item(
        self,
        caller: str,
        title: str,
        creator: str,
        category: str,
        description: str = "",
        now: Optional[datetime] = None,
    ) -> int:
        """Create an item and return its id."""
        request = AddItemRequest(title, creator, category, description)
        return self._submit(request, caller, now).value

    def retire_item(self, caller: str, item_id: int, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(RetireItemRequest(item_id), caller, now)

    def update_item_field(
        self, caller: str, item_id: int, field_name: str, value: str, now: Optional[datetime] = None,
    ) -> CommandResult:
        return self._submit(UpdateItemFieldRequest(item_id, field_name, value), caller, now)

    def update_title(self, caller: str, item_id: int, title: str, now: Optional[datetime] = None) -> CommandResult:
        return self.update_item_field(caller, item_id, "title", title, now)

    def update_creator(self, caller: str, item_id: int, creator: str, now: Optional[datetime] = None) -> CommandResult:
        return self.update_item_field(caller, item_id, "creator", creator, now)

    def update_category(self, caller: str, item_id: int, category: str, now: Optional[datetime] = None) -> CommandResult:
        return self.update_item_field(caller, item_id, "category", category, now)

    def update_description(
        self, caller: str, item_id: int, description: str, now: Optional[datetime] = None,
    ) -> CommandResult:
        return self.update_item_field(caller, item_id, "description", description, now)

    def get_item(self, item_id: int) -> Optional[Item]:
        """Detached copy of the record (retired items included), or None."""
        def snapshot():
            item = self._state.item(item_id)
            return item.snapshot() if item is not None else None

        return self._bus.read(snapshot)

    # ══════════════════════════════════════════════════════════
    # LENDING
    # ══════════════════════════════════════════════════════════

    def borrow(self, caller: str, item_id: int, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(BorrowItemRequest(item_id), caller, now)

    def renew(self, caller: str, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(RenewLoanRequest(), caller, now)

    def return_item(self, caller: str, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(ReturnItemRequest(), caller, now)

    def pay_penalty(self, caller: str, now: Optional[datetime] = None) -> CommandResult:
        return self._submit(PayPenaltyRequest(), caller, now)

    def is_overdue(self, identity: str, now: Optional[datetime] = None) -> bool:
        now = self._now(now)
        return self._bus.read(lambda: self._lending.is_overdue(identity, now))

    def list_overdue_loans(self, now: Optional[datetime] = None) -> Tuple[OverdueLoan, ...]:
        now = self._now(now)
        return self._bus.read(lambda: self._lending.overdue_loans(now))

    def get_participant(self, identity: str) -> Optional[Participant]:
        """Detached copy of the participant record, or None if never enrolled."""
        def snapshot():
            record = self._state.participant(identity)
            return record.snapshot() if record is not None else None

        return self._bus.read(snapshot)

    # ══════════════════════════════════════════════════════════
    # EVENTS / DIAGNOSTICS
    # ══════════════════════════════════════════════════════════

    def subscribe(
        self,
        event_type: str,
        handler: Callable[[LedgerEvent], None],
        subscriber_name: str = "external",
    ) -> None:
        self._subscribers.register_subscriber(event_type, handler, subscriber_name)

    def events(self) -> Tuple[LedgerEvent, ...]:
        return self._bus.read(lambda: self._state.journal)

    def check_invariants(self) -> None:
        self._bus.read(lambda: run_invariant_checks(self._state))


def build_ledger(
    administrator: str,
    policy: Optional[LendingPolicy] = None,
    clock: Optional[Clock] = None,
) -> LedgerSystem:
    return LedgerSystem(administrator, policy=policy, clock=clock)
