"""
Ledger Core Time — Public API
===============================
Explicit clock protocol and due-date helpers.
Doctrine: NO datetime.now() in engine logic.
"""

from core.time.clock import Clock, FixedClock, SystemClock
from core.time.temporal import extend, is_past, whole_units_between

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "extend",
    "is_past",
    "whole_units_between",
]
