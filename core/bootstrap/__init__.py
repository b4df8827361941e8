"""
Ledger Bootstrap — Public API
===============================
Wires a ledger together and checks that it is sound.
"""

from core.bootstrap.errors import SystemBootstrapError
from core.bootstrap.invariants import run_invariant_checks
from core.bootstrap.system import LedgerSystem, build_ledger

__all__ = [
    "SystemBootstrapError",
    "run_invariant_checks",
    "LedgerSystem",
    "build_ledger",
]
