"""
Ledger State — Shared Application State
=========================================
One explicit object owns every registry the engines touch:
item table, participant table, role table, participant registry,
item id counter and the event journal.

It is passed by reference to each engine service. It holds no
lock itself; the CommandBus serializes every command against it.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from core.events.models import LedgerEvent
from core.permissions.roles import RoleTable
from core.state.models import Item, Participant
from core.state.registry import ParticipantRegistry


class LedgerState:
    def __init__(self, administrator: str, initial_item_id: int = 1) -> None:
        self.roles = RoleTable(administrator)
        self.items: Dict[int, Item] = {}
        self.participants: Dict[str, Participant] = {}
        self.registry = ParticipantRegistry()
        self._next_item_id = initial_item_id
        self._journal: List[LedgerEvent] = []

    @property
    def administrator(self) -> str:
        return self.roles.administrator

    # ── Items ─────────────────────────────────────────────────

    @property
    def next_item_id(self) -> int:
        return self._next_item_id

    def allocate_item_id(self) -> int:
        """Hand out the next id. Ids are never reused, even after retirement."""
        item_id = self._next_item_id
        self._next_item_id += 1
        return item_id

    def item(self, item_id: int) -> Optional[Item]:
        """Raw record, including retired items."""
        return self.items.get(item_id)

    def live_item(self, item_id: int) -> Optional[Item]:
        """Record only if the item exists (created and not retired)."""
        item = self.items.get(item_id)
        if item is None or not item.exists:
            return None
        return item

    # ── Participants ──────────────────────────────────────────

    def participant(self, identity: str) -> Optional[Participant]:
        return self.participants.get(identity)

    def ensure_participant(self, identity: str) -> Participant:
        record = self.participants.get(identity)
        if record is None:
            record = Participant(identity=identity)
            self.participants[identity] = record
        return record

    def is_enrolled(self, identity: str) -> bool:
        record = self.participants.get(identity)
        return record is not None and record.enrolled

    def active_loans(self) -> Iterator[Participant]:
        for record in self.participants.values():
            if record.has_active_loan:
                yield record

    # ── Journal ───────────────────────────────────────────────

    def record(self, event: LedgerEvent) -> None:
        self._journal.append(event)

    @property
    def journal(self) -> Tuple[LedgerEvent, ...]:
        return tuple(self._journal)
