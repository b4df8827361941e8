"""
Ledger Command Layer — Command Outcome
========================================
ACCEPTED: every policy passed and the command's events are journaled.
REJECTED: one policy refused it; only the rejection record was journaled.

A rejected outcome always names its reason, an accepted one never does.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from core.commands.rejection import RejectionReason


class CommandStatus(Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CommandOutcome:
    command_id: uuid.UUID
    status: CommandStatus
    reason: Optional[RejectionReason]
    occurred_at: datetime

    def __post_init__(self):
        rejected = self.status is CommandStatus.REJECTED
        if rejected != (self.reason is not None):
            raise ValueError(
                "A REJECTED outcome needs a RejectionReason and an ACCEPTED one must not carry it."
            )

    @property
    def is_accepted(self) -> bool:
        return self.status is CommandStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status is CommandStatus.REJECTED

    @classmethod
    def accepted(cls, command) -> "CommandOutcome":
        return cls(command.command_id, CommandStatus.ACCEPTED, None, command.issued_at)

    @classmethod
    def rejected(cls, command, reason: RejectionReason) -> "CommandOutcome":
        return cls(command.command_id, CommandStatus.REJECTED, reason, command.issued_at)
