"""
Ledger Core Time — Temporal Helpers
=====================================
Pure functions for due-date arithmetic.
All functions take explicit datetime arguments and never read a clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta


def is_past(deadline: datetime, now: datetime) -> bool:
    """Strictly after the deadline. Being exactly on time is not late."""
    return now > deadline


def whole_units_between(earlier: datetime, later: datetime, unit: timedelta) -> int:
    """
    Count complete `unit`s elapsed from earlier to later (floor).

    Returns 0 when later <= earlier or when less than one unit elapsed.
    """
    if unit <= timedelta(0):
        raise ValueError("unit must be a positive timedelta.")
    if later <= earlier:
        return 0
    return (later - earlier) // unit


def extend(deadline: datetime, duration: timedelta) -> datetime:
    """Push a deadline forward by one duration (additive, not from now)."""
    return deadline + duration
