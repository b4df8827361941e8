"""
Tests for core.state and core.permissions — records, registry,
role table and access control predicates.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.commands.rejection import ReasonCode
from core.permissions import AccessControl, Role, RoleTable
from core.state import Item, LedgerState, Participant, ParticipantRegistry

NOW = datetime(2026, 2, 19, 12, 0, 0, tzinfo=timezone.utc)


class TestParticipantRegistry:
    def test_add_is_duplicate_free(self):
        registry = ParticipantRegistry()
        assert registry.add("a")
        assert not registry.add("a")
        assert registry.snapshot() == ("a",)

    def test_remove_swaps_last_into_gap(self):
        registry = ParticipantRegistry()
        for identity in ("a", "b", "c", "d"):
            registry.add(identity)
        assert registry.remove("b")
        assert registry.snapshot() == ("a", "d", "c")
        assert "b" not in registry
        assert len(registry) == 3

    def test_remove_last_entry(self):
        registry = ParticipantRegistry()
        registry.add("a")
        registry.add("b")
        registry.remove("b")
        assert registry.snapshot() == ("a",)

    def test_remove_then_readd(self):
        registry = ParticipantRegistry()
        for identity in ("a", "b", "c"):
            registry.add(identity)
        registry.remove("a")
        registry.add("a")
        assert sorted(registry) == ["a", "b", "c"]
        registry.remove("c")
        assert sorted(registry) == ["a", "b"]

    def test_remove_absent(self):
        assert not ParticipantRegistry().remove("ghost")


class TestRoleTable:
    def test_administrator_fixed(self):
        roles = RoleTable("admin")
        assert roles.role_of("admin") is Role.ADMINISTRATOR
        assert roles.role_of("anyone") is Role.NONE

    def test_requires_administrator(self):
        with pytest.raises(ValueError):
            RoleTable("")

    def test_single_tag_per_identity(self):
        roles = RoleTable("admin")
        roles.assign("lib", Role.LIBRARIAN)
        roles.assign("lib", Role.LIBRARIAN)
        with pytest.raises(ValueError, match="already holds"):
            roles.assign("lib", Role.PARTICIPANT)

    def test_cannot_assign_administrator(self):
        roles = RoleTable("admin")
        with pytest.raises(ValueError):
            roles.assign("someone", Role.ADMINISTRATOR)
        with pytest.raises(ValueError):
            roles.assign("admin", Role.LIBRARIAN)

    def test_clear_only_matching_tag(self):
        roles = RoleTable("admin")
        roles.assign("p", Role.PARTICIPANT)
        assert not roles.clear("p", Role.LIBRARIAN)
        assert roles.role_of("p") is Role.PARTICIPANT
        assert roles.clear("p", Role.PARTICIPANT)
        assert roles.role_of("p") is Role.NONE
        assert not roles.clear("admin", Role.LIBRARIAN)

    def test_holders(self):
        roles = RoleTable("admin")
        roles.assign("b", Role.LIBRARIAN)
        roles.assign("a", Role.LIBRARIAN)
        assert roles.holders(Role.LIBRARIAN) == ("a", "b")
        assert roles.holders(Role.ADMINISTRATOR) == ("admin",)


class TestRecords:
    def test_retire_wipes_item(self):
        item = Item(1, "T", "C", "Cat", "D", borrowed=True, exists=True)
        item.retire()
        assert item == Item(1)

    def test_snapshot_is_detached(self):
        item = Item(1, "T", exists=True)
        copy = item.snapshot()
        copy.title = "changed"
        assert item.title == "T"

    def test_participant_loan_cycle(self):
        record = Participant("p", enrolled=True)
        record.start_loan(3, NOW, NOW + timedelta(days=14))
        assert not record.is_overdue(NOW + timedelta(days=14))
        assert record.is_overdue(NOW + timedelta(days=14, seconds=1))
        record.end_loan()
        assert record.active_item_id is None
        assert not record.has_active_loan

    def test_is_overdue_requires_loan(self):
        with pytest.raises(ValueError, match="no active loan"):
            Participant("p").is_overdue(NOW)


class TestLedgerState:
    def test_item_ids_are_sequential(self):
        state = LedgerState("admin", initial_item_id=7)
        assert state.allocate_item_id() == 7
        assert state.allocate_item_id() == 8
        assert state.next_item_id == 9

    def test_live_item_hides_retired(self):
        state = LedgerState("admin")
        state.items[1] = Item(1, "T", exists=True)
        state.items[2] = Item(2)
        assert state.live_item(1) is state.items[1]
        assert state.live_item(2) is None
        assert state.item(2) is state.items[2]
        assert state.live_item(99) is None

    def test_ensure_participant_creates_once(self):
        state = LedgerState("admin")
        first = state.ensure_participant("p")
        assert state.ensure_participant("p") is first
        assert not state.is_enrolled("p")


class TestAccessControl:
    def setup_method(self):
        self.state = LedgerState("admin")
        self.state.roles.assign("lib", Role.LIBRARIAN)
        record = self.state.ensure_participant("p")
        record.enrolled = True
        self.state.roles.assign("p", Role.PARTICIPANT)
        self.access = AccessControl(self.state)

    def test_require_administrator(self):
        assert self.access.require_administrator("admin") is None
        assert self.access.require_administrator("lib").code == ReasonCode.UNAUTHORIZED

    def test_require_librarian(self):
        assert self.access.require_librarian("lib") is None
        assert self.access.require_librarian("admin").code == ReasonCode.UNAUTHORIZED

    def test_require_administrator_or_librarian(self):
        assert self.access.require_administrator_or_librarian("admin") is None
        assert self.access.require_administrator_or_librarian("lib") is None
        assert self.access.require_administrator_or_librarian("p").code == ReasonCode.UNAUTHORIZED

    def test_require_enrolled_participant(self):
        assert self.access.require_enrolled_participant("p") is None
        assert self.access.require_enrolled_participant("lib").code == ReasonCode.NOT_ENROLLED
        assert self.access.require_enrolled_participant("ghost").code == ReasonCode.NOT_ENROLLED

    def test_predicates_read_fresh_state(self):
        assert self.access.require_librarian("lib") is None
        self.state.roles.clear("lib", Role.LIBRARIAN)
        assert self.access.require_librarian("lib") is not None
