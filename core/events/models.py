"""
Ledger Event Bus — Event Record
=================================
The immutable fact produced by an accepted (or rejected) command.

Event type format: engine.domain.action[.vN]
(e.g. 'lending.penalty.accrued.v1').
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class LedgerEvent:
    """
    One journaled fact.

    Fields:
        event_id:      Unique identifier (UUID).
        event_type:    engine.domain.action[.vN]
        actor_id:      Identity of the caller whose command produced it.
        occurred_at:   The command's issued_at.
        source_engine: Engine that produced the event.
        payload:       Event data (plain dict, JSON-friendly).
        command_id:    Command that caused the event.
    """

    event_type: str
    actor_id: str
    occurred_at: datetime
    source_engine: str
    payload: Dict[str, Any] = field(default_factory=dict)
    command_id: uuid.UUID | None = None
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def from_command(cls, command, event_type: str, payload: Dict[str, Any]) -> "LedgerEvent":
        return cls(
            event_type=event_type,
            actor_id=command.actor_id,
            occurred_at=command.issued_at,
            source_engine=command.source_engine,
            payload=payload,
            command_id=command.command_id,
        )

    def to_dict(self) -> dict:
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "actor_id": self.actor_id,
            "occurred_at": self.occurred_at.isoformat(),
            "source_engine": self.source_engine,
            "command_id": str(self.command_id) if self.command_id else None,
            "payload": dict(self.payload),
        }
