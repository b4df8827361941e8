"""
Ledger State — Entity Records
===============================
Mutable records owned by LedgerState. Only engine services
mutate them, and only while holding the ledger lock.
Readers get detached copies via snapshot().
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


TEXT_FIELDS = ("title", "creator", "category", "description")


@dataclass
class Item:
    item_id: int
    title: str = ""
    creator: str = ""
    category: str = ""
    description: str = ""
    borrowed: bool = False
    exists: bool = False

    def retire(self) -> None:
        """Soft delete: the id stays allocated, everything else is wiped."""
        for name in TEXT_FIELDS:
            setattr(self, name, "")
        self.borrowed = False
        self.exists = False

    def snapshot(self) -> "Item":
        return replace(self)


@dataclass
class Participant:
    identity: str
    enrolled: bool = False
    has_active_loan: bool = False
    has_hold: bool = False
    active_item_id: Optional[int] = None
    loan_start: Optional[datetime] = None
    loan_due: Optional[datetime] = None
    penalty_balance: int = 0

    def is_overdue(self, now: datetime) -> bool:
        if not self.has_active_loan or self.loan_due is None:
            raise ValueError(f"Participant '{self.identity}' has no active loan.")
        return now > self.loan_due

    def start_loan(self, item_id: int, start: datetime, due: datetime) -> None:
        self.has_active_loan = True
        self.active_item_id = item_id
        self.loan_start = start
        self.loan_due = due

    def end_loan(self) -> None:
        self.has_active_loan = False
        self.active_item_id = None

    def snapshot(self) -> "Participant":
        return replace(self)
