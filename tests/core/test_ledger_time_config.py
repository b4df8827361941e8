"""
Tests for core.time and core.config — clock, due-date helpers, lending policy.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.config import LendingPolicy
from core.time import FixedClock, SystemClock, extend, is_past, whole_units_between

T0 = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)


class TestClocks:
    def test_system_clock_is_utc(self):
        assert SystemClock().now_utc().tzinfo == timezone.utc

    def test_fixed_clock_rejects_naive(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2026, 1, 1))

    def test_fixed_clock_advance(self):
        clock = FixedClock(T0)
        assert clock.advance(DAY) == T0 + DAY
        clock.advance(60)
        assert clock.now_utc() == T0 + DAY + timedelta(seconds=60)

    def test_fixed_clock_cannot_go_back(self):
        with pytest.raises(ValueError):
            FixedClock(T0).advance(timedelta(seconds=-1))

    def test_fixed_clock_set(self):
        clock = FixedClock(T0)
        clock.set(T0 - DAY)
        assert clock.now_utc() == T0 - DAY


class TestTemporal:
    def test_is_past_is_strict(self):
        assert not is_past(T0, T0)
        assert is_past(T0, T0 + timedelta(microseconds=1))
        assert not is_past(T0, T0 - DAY)

    def test_whole_units_floor(self):
        assert whole_units_between(T0, T0 + DAY, DAY) == 1
        assert whole_units_between(T0, T0 + DAY * 2 + timedelta(hours=23), DAY) == 2
        assert whole_units_between(T0, T0 + timedelta(hours=23), DAY) == 0

    def test_whole_units_never_negative(self):
        assert whole_units_between(T0, T0 - DAY * 3, DAY) == 0

    def test_whole_units_rejects_zero_unit(self):
        with pytest.raises(ValueError):
            whole_units_between(T0, T0 + DAY, timedelta(0))

    def test_extend_is_additive(self):
        assert extend(T0, timedelta(days=14)) == T0 + timedelta(days=14)


class TestLendingPolicy:
    def test_defaults(self):
        policy = LendingPolicy()
        assert policy.lease_duration == timedelta(days=14)
        assert policy.overdue_unit == DAY
        assert policy.fine_rate_per_unit == 10
        assert policy.initial_item_id == 1

    def test_penalty_for(self):
        policy = LendingPolicy(fine_rate_per_unit=25)
        assert policy.penalty_for(3) == 75
        assert policy.penalty_for(0) == 0
        assert policy.penalty_for(-2) == 0

    @pytest.mark.parametrize("kwargs", [
        {"fine_rate_per_unit": -1},
        {"lease_duration": timedelta(0)},
        {"overdue_unit": timedelta(seconds=-5)},
        {"initial_item_id": -1},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            LendingPolicy(**kwargs)

    def test_from_mapping(self):
        policy = LendingPolicy.from_mapping({
            "fine_rate_per_unit": "5",
            "lease_days": 7,
            "overdue_unit_seconds": 3600,
            "initial_item_id": 100,
        })
        assert policy == LendingPolicy(
            fine_rate_per_unit=5,
            lease_duration=timedelta(days=7),
            overdue_unit=timedelta(hours=1),
            initial_item_id=100,
        )

    def test_from_env_ignores_unset_values(self):
        policy = LendingPolicy.from_env({
            "LEDGER_FINE_RATE_PER_UNIT": "50",
            "LEDGER_LEASE_DAYS": "",
        })
        assert policy.fine_rate_per_unit == 50
        assert policy.lease_duration == timedelta(days=14)

    def test_frozen(self):
        with pytest.raises(Exception):
            LendingPolicy().fine_rate_per_unit = 1
