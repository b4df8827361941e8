"""
Tests for core.bootstrap.invariants — each ledger law, broken on purpose.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.bootstrap import SystemBootstrapError, build_ledger, run_invariant_checks
from core.permissions import Role
from core.time import FixedClock

T0 = datetime(2026, 4, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def ledger():
    ledger = build_ledger("admin", clock=FixedClock(T0))
    ledger.enroll_participant("admin", "p")
    ledger.enroll_participant("admin", "q")
    ledger.add_item("admin", "Book A", "Author", "Fiction")
    ledger.add_item("admin", "Book B", "Author", "Fiction")
    ledger.borrow("p", 1)
    return ledger


def violated(ledger):
    with pytest.raises(SystemBootstrapError) as info:
        run_invariant_checks(ledger.state)
    return info.value.invariant


class TestInvariantChecks:
    def test_healthy_ledger_passes(self, ledger):
        ledger.check_invariants()

    def test_retired_item_with_fields(self, ledger):
        item = ledger.state.items[2]
        item.exists = False
        assert violated(ledger) == "RETIRED_ITEM_FIELDS"

    def test_retired_item_borrowed(self, ledger):
        item = ledger.state.items[2]
        item.retire()
        item.borrowed = True
        assert violated(ledger) == "RETIRED_ITEM_BORROWED"

    def test_loan_without_borrowed_item(self, ledger):
        ledger.state.items[1].borrowed = False
        assert violated(ledger) == "LOAN_WITHOUT_BORROWED_ITEM"

    def test_orphan_borrowed_item(self, ledger):
        ledger.state.items[2].borrowed = True
        assert violated(ledger) == "ORPHAN_BORROWED_ITEM"

    def test_item_loaned_twice(self, ledger):
        ledger.state.participant("q").start_loan(1, T0, T0 + timedelta(days=14))
        assert violated(ledger) == "ITEM_LOANED_TWICE"

    def test_stale_active_item(self, ledger):
        ledger.state.participant("q").active_item_id = 2
        assert violated(ledger) == "STALE_ACTIVE_ITEM"

    def test_registry_mismatch(self, ledger):
        ledger.state.registry.remove("q")
        assert violated(ledger) == "REGISTRY_MISMATCH"

    def test_role_tag_mismatch(self, ledger):
        ledger.state.roles.clear("q", Role.PARTICIPANT)
        assert violated(ledger) == "ROLE_TAG_MISMATCH"

    def test_negative_penalty(self, ledger):
        ledger.state.participant("q").penalty_balance = -1
        assert violated(ledger) == "NEGATIVE_PENALTY"

    def test_error_message_names_invariant(self, ledger):
        ledger.state.items[2].borrowed = True
        with pytest.raises(SystemBootstrapError, match="ORPHAN_BORROWED_ITEM"):
            ledger.check_invariants()
