"""
Ledger Catalog Engine — Test Suite
====================================
Tests verify:
- Request validation and command construction
- Staff-only authority
- Sequential, never-reused item ids
- Field updates and retirement, frozen while on loan
- Rejections leave the catalog untouched
"""

from datetime import datetime, timezone

import pytest

from core.bootstrap import build_ledger
from core.commands.errors import ItemBorrowed, NotFound, Unauthorized
from core.config import LendingPolicy
from core.time import FixedClock
from engines.catalog.commands import (
    CATALOG_ITEM_ADD_REQUEST,
    AddItemRequest,
    RetireItemRequest,
    UpdateItemFieldRequest,
)
from engines.catalog.events import (
    CATALOG_ITEM_ADDED_V1,
    CATALOG_ITEM_RETIRED_V1,
    CATALOG_ITEM_UPDATED_V1,
)

NOW = datetime(2026, 2, 19, 12, 0, 0, tzinfo=timezone.utc)
ADMIN = "admin"
LIBRARIAN = "lib-001"
MEMBER = "member-001"


@pytest.fixture
def ledger():
    ledger = build_ledger(ADMIN, clock=FixedClock(NOW))
    ledger.enroll_librarian(ADMIN, LIBRARIAN)
    ledger.enroll_participant(ADMIN, MEMBER)
    return ledger


def add_book(ledger, caller=ADMIN, title="Book A"):
    return ledger.add_item(caller, title, "A. Author", "Fiction", "First edition")


# ══════════════════════════════════════════════════════════════
# COMMANDS
# ══════════════════════════════════════════════════════════════

class TestCatalogCommands:
    def test_add_item_request(self):
        cmd = AddItemRequest("Book A", "A. Author", "Fiction").to_command(
            actor_id=ADMIN, issued_at=NOW,
        )
        assert cmd.command_type == CATALOG_ITEM_ADD_REQUEST
        assert cmd.source_engine == "catalog"
        assert cmd.payload["description"] == ""

    def test_add_item_requires_text(self):
        with pytest.raises(ValueError, match="title"):
            AddItemRequest(None, "A", "B")

    def test_retire_requires_valid_id(self):
        with pytest.raises(ValueError, match="item_id"):
            RetireItemRequest(-1)
        with pytest.raises(ValueError, match="item_id"):
            RetireItemRequest(True)

    def test_update_rejects_unknown_field(self):
        with pytest.raises(ValueError, match="field_name"):
            UpdateItemFieldRequest(1, "borrowed", "yes")


# ══════════════════════════════════════════════════════════════
# SERVICE
# ══════════════════════════════════════════════════════════════

class TestAddItem:
    def test_admin_and_librarian_can_add(self, ledger):
        assert add_book(ledger, ADMIN) == 1
        assert add_book(ledger, LIBRARIAN) == 2

    def test_item_fields_stored(self, ledger):
        item_id = add_book(ledger)
        item = ledger.get_item(item_id)
        assert item.title == "Book A"
        assert item.creator == "A. Author"
        assert item.category == "Fiction"
        assert item.description == "First edition"
        assert item.exists and not item.borrowed

    def test_participant_cannot_add(self, ledger):
        with pytest.raises(Unauthorized):
            add_book(ledger, MEMBER)
        assert ledger.state.next_item_id == 1

    def test_stranger_cannot_add(self, ledger):
        with pytest.raises(Unauthorized):
            add_book(ledger, "stranger")

    def test_ids_start_at_configured_value(self):
        ledger = build_ledger(ADMIN, policy=LendingPolicy(initial_item_id=1000), clock=FixedClock(NOW))
        assert add_book(ledger) == 1000
        assert add_book(ledger) == 1001

    def test_ids_never_reused_after_retirement(self, ledger):
        first = add_book(ledger)
        ledger.retire_item(ADMIN, first)
        assert add_book(ledger) == first + 1

    def test_emits_added_event(self, ledger):
        item_id = add_book(ledger)
        event = ledger.events()[-1]
        assert event.event_type == CATALOG_ITEM_ADDED_V1
        assert event.payload["item_id"] == item_id
        assert event.actor_id == ADMIN


class TestUpdateItem:
    @pytest.mark.parametrize("method,field_name", [
        ("update_title", "title"),
        ("update_creator", "creator"),
        ("update_category", "category"),
        ("update_description", "description"),
    ])
    def test_update_single_field(self, ledger, method, field_name):
        item_id = add_book(ledger)
        before = ledger.get_item(item_id)
        getattr(ledger, method)(LIBRARIAN, item_id, "New value")
        after = ledger.get_item(item_id)
        assert getattr(after, field_name) == "New value"
        for other in ("title", "creator", "category", "description"):
            if other != field_name:
                assert getattr(after, other) == getattr(before, other)

    def test_update_event_keeps_previous_value(self, ledger):
        item_id = add_book(ledger)
        ledger.update_title(ADMIN, item_id, "Book A, revised")
        event = ledger.events()[-1]
        assert event.event_type == CATALOG_ITEM_UPDATED_V1
        assert event.payload["previous_value"] == "Book A"
        assert event.payload["value"] == "Book A, revised"

    def test_update_missing_item(self, ledger):
        with pytest.raises(NotFound):
            ledger.update_title(ADMIN, 42, "x")

    def test_update_retired_item(self, ledger):
        item_id = add_book(ledger)
        ledger.retire_item(ADMIN, item_id)
        with pytest.raises(NotFound):
            ledger.update_category(ADMIN, item_id, "x")

    def test_update_borrowed_item(self, ledger):
        item_id = add_book(ledger)
        ledger.borrow(MEMBER, item_id)
        with pytest.raises(ItemBorrowed):
            ledger.update_description(LIBRARIAN, item_id, "x")
        assert ledger.get_item(item_id).description == "First edition"

    def test_participant_cannot_update(self, ledger):
        item_id = add_book(ledger)
        with pytest.raises(Unauthorized):
            ledger.update_title(MEMBER, item_id, "x")

    def test_authority_checked_before_existence(self, ledger):
        with pytest.raises(Unauthorized):
            ledger.update_title(MEMBER, 42, "x")


class TestRetireItem:
    def test_retire_clears_everything(self, ledger):
        item_id = add_book(ledger)
        ledger.retire_item(LIBRARIAN, item_id)
        item = ledger.get_item(item_id)
        assert not item.exists
        assert not item.borrowed
        assert (item.title, item.creator, item.category, item.description) == ("", "", "", "")
        assert ledger.events()[-1].event_type == CATALOG_ITEM_RETIRED_V1

    def test_retire_twice(self, ledger):
        item_id = add_book(ledger)
        ledger.retire_item(ADMIN, item_id)
        with pytest.raises(NotFound):
            ledger.retire_item(ADMIN, item_id)

    def test_retire_never_created(self, ledger):
        with pytest.raises(NotFound):
            ledger.retire_item(ADMIN, 7)
        assert ledger.get_item(7) is None

    def test_retire_borrowed(self, ledger):
        item_id = add_book(ledger)
        ledger.borrow(MEMBER, item_id)
        with pytest.raises(ItemBorrowed):
            ledger.retire_item(ADMIN, item_id)
        item = ledger.get_item(item_id)
        assert item.exists and item.borrowed

    def test_retire_after_return(self, ledger):
        item_id = add_book(ledger)
        ledger.borrow(MEMBER, item_id)
        ledger.return_item(MEMBER)
        ledger.retire_item(ADMIN, item_id)
        assert not ledger.get_item(item_id).exists
        ledger.check_invariants()

    def test_former_librarian_loses_authority(self, ledger):
        item_id = add_book(ledger)
        ledger.unenroll_librarian(ADMIN, LIBRARIAN)
        with pytest.raises(Unauthorized):
            ledger.retire_item(LIBRARIAN, item_id)
