"""
Ledger Command Layer — Command Base Contract
==============================================
Each ledger operation is submitted as exactly one Command.

A Command records who asked, for what, and when. The engines read
it; nothing writes to it. `issued_at` is the only clock reading an
operation ever sees, so due dates, overdue checks and penalties all
agree with each other within one call.

Type names are dotted: <engine>.<subject>.<verb>.request, where the
first segment must name the engine that owns the command.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

REQUEST_SUFFIX = ".request"
REJECTED_SUFFIX = ".rejected"
MIN_TYPE_SEGMENTS = 4


def _check_command_type(command_type, source_engine) -> None:
    if not isinstance(command_type, str) or not command_type.endswith(REQUEST_SUFFIX):
        raise ValueError(
            f"Command type {command_type!r} is not a '<engine>...{REQUEST_SUFFIX}' name."
        )

    segments = command_type.split(".")
    if len(segments) < MIN_TYPE_SEGMENTS or not all(segments):
        raise ValueError(
            f"Command type {command_type!r} needs {MIN_TYPE_SEGMENTS} non-empty "
            f"segments, e.g. 'lending.item.borrow.request'."
        )

    if segments[0] != source_engine:
        raise ValueError(
            f"Command type {command_type!r} belongs to engine '{segments[0]}', "
            f"not '{source_engine}'."
        )


@dataclass(frozen=True)
class Command:
    """
    Canonical ledger Command.

    Fields:
        command_id:     UUID of this submission.
        command_type:   e.g. 'catalog.item.add.request'.
        actor_id:       Caller identity; authority is checked against it.
        payload:        Operation arguments.
        issued_at:      Timezone-aware "now" for the whole operation.
        correlation_id: Shared by the events the command produces.
        source_engine:  Owning engine (first segment of command_type).
    """

    command_id: uuid.UUID
    command_type: str
    actor_id: str
    payload: dict
    issued_at: datetime
    correlation_id: uuid.UUID
    source_engine: str

    def __post_init__(self):
        for name in ("command_id", "correlation_id"):
            if not isinstance(getattr(self, name), uuid.UUID):
                raise ValueError(f"{name} must be a UUID.")

        _check_command_type(self.command_type, self.source_engine)

        if not isinstance(self.actor_id, str) or not self.actor_id:
            raise ValueError("Every command needs a caller identity (actor_id).")

        if not isinstance(self.payload, dict):
            raise TypeError(
                f"payload must be a dict, got {type(self.payload).__name__}."
            )

        if not isinstance(self.issued_at, datetime) or self.issued_at.tzinfo is None:
            raise ValueError("issued_at must be a timezone-aware datetime.")


def build_command(
    *,
    command_type: str,
    actor_id: str,
    payload: dict,
    issued_at: datetime,
    source_engine: str,
    correlation_id: uuid.UUID | None = None,
) -> Command:
    """Stamp a fresh command_id (and correlation_id unless given)."""
    return Command(
        command_id=uuid.uuid4(),
        command_type=command_type,
        actor_id=actor_id,
        payload=payload,
        issued_at=issued_at,
        correlation_id=correlation_id or uuid.uuid4(),
        source_engine=source_engine,
    )


def derive_rejection_event_type(command_type: str) -> str:
    """lending.item.borrow.request → lending.item.borrow.rejected"""
    if not command_type.endswith(REQUEST_SUFFIX):
        raise ValueError(f"{command_type!r} is not a request type.")
    return command_type[: -len(REQUEST_SUFFIX)] + REJECTED_SUFFIX


def derive_source_engine(command_type: str) -> str:
    """lending.item.borrow.request → lending"""
    return command_type.split(".", 1)[0]
