"""
Ledger Core Config — Lending Policy
=====================================
Doctrine: No hardcoded fine rates or lease lengths in engine logic.
The constants below are fixed once, when the ledger is built,
and are immutable for its lifetime.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Optional


DEFAULT_FINE_RATE_PER_UNIT = 10
DEFAULT_LEASE_DURATION = timedelta(days=14)
DEFAULT_OVERDUE_UNIT = timedelta(days=1)
DEFAULT_INITIAL_ITEM_ID = 1

ENV_FINE_RATE = "LEDGER_FINE_RATE_PER_UNIT"
ENV_LEASE_DAYS = "LEDGER_LEASE_DAYS"
ENV_OVERDUE_UNIT_SECONDS = "LEDGER_OVERDUE_UNIT_SECONDS"
ENV_INITIAL_ITEM_ID = "LEDGER_INITIAL_ITEM_ID"


# ══════════════════════════════════════════════════════════════
# LENDING POLICY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LendingPolicy:
    """
    Tunable lending constants.

    fine_rate_per_unit: penalty (minor units) per whole overdue unit.
    lease_duration:     span granted per borrow, and added per renewal.
    overdue_unit:       granularity at which lateness is fined (one day).
    initial_item_id:    first catalog identifier handed out.
    """

    fine_rate_per_unit: int = DEFAULT_FINE_RATE_PER_UNIT
    lease_duration: timedelta = DEFAULT_LEASE_DURATION
    overdue_unit: timedelta = DEFAULT_OVERDUE_UNIT
    initial_item_id: int = DEFAULT_INITIAL_ITEM_ID

    def __post_init__(self) -> None:
        if not isinstance(self.fine_rate_per_unit, int) or self.fine_rate_per_unit < 0:
            raise ValueError(
                f"fine_rate_per_unit must be a non-negative int, got {self.fine_rate_per_unit!r}."
            )
        if not isinstance(self.lease_duration, timedelta) or self.lease_duration <= timedelta(0):
            raise ValueError("lease_duration must be a positive timedelta.")
        if not isinstance(self.overdue_unit, timedelta) or self.overdue_unit <= timedelta(0):
            raise ValueError("overdue_unit must be a positive timedelta.")
        if not isinstance(self.initial_item_id, int) or self.initial_item_id < 0:
            raise ValueError(
                f"initial_item_id must be a non-negative int, got {self.initial_item_id!r}."
            )

    def penalty_for(self, overdue_units: int) -> int:
        """Penalty owed for a number of whole overdue units."""
        return max(0, overdue_units) * self.fine_rate_per_unit

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LendingPolicy":
        """
        Build from plain values:
            {"fine_rate_per_unit": 25, "lease_days": 7,
             "overdue_unit_seconds": 86400, "initial_item_id": 100}
        Missing keys fall back to defaults.
        """
        kwargs: dict = {}
        if "fine_rate_per_unit" in data:
            kwargs["fine_rate_per_unit"] = int(data["fine_rate_per_unit"])
        if "lease_days" in data:
            kwargs["lease_duration"] = timedelta(days=float(data["lease_days"]))
        if "overdue_unit_seconds" in data:
            kwargs["overdue_unit"] = timedelta(seconds=float(data["overdue_unit_seconds"]))
        if "initial_item_id" in data:
            kwargs["initial_item_id"] = int(data["initial_item_id"])
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LendingPolicy":
        """Read LEDGER_* variables; unset variables keep their defaults."""
        environ = os.environ if environ is None else environ
        mapping = {}
        for env_key, key in (
            (ENV_FINE_RATE, "fine_rate_per_unit"),
            (ENV_LEASE_DAYS, "lease_days"),
            (ENV_OVERDUE_UNIT_SECONDS, "overdue_unit_seconds"),
            (ENV_INITIAL_ITEM_ID, "initial_item_id"),
        ):
            value = environ.get(env_key)
            if value not in (None, ""):
                mapping[key] = value
        return cls.from_mapping(mapping)
