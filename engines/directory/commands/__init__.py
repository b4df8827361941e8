"""
Ledger Directory Engine — Request Commands
============================================
Enrollment requests for librarians and participants.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.commands.base import Command, build_command


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

DIRECTORY_LIBRARIAN_ENROLL_REQUEST = "directory.librarian.enroll.request"
DIRECTORY_LIBRARIAN_UNENROLL_REQUEST = "directory.librarian.unenroll.request"
DIRECTORY_PARTICIPANT_ENROLL_REQUEST = "directory.participant.enroll.request"
DIRECTORY_PARTICIPANT_UNENROLL_REQUEST = "directory.participant.unenroll.request"

DIRECTORY_COMMAND_TYPES = frozenset({
    DIRECTORY_LIBRARIAN_ENROLL_REQUEST,
    DIRECTORY_LIBRARIAN_UNENROLL_REQUEST,
    DIRECTORY_PARTICIPANT_ENROLL_REQUEST,
    DIRECTORY_PARTICIPANT_UNENROLL_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class _IdentityRequest:
    identity: str

    command_type = ""

    def __post_init__(self):
        if not self.identity or not isinstance(self.identity, str):
            raise ValueError("identity must be a non-empty string.")

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return build_command(
            command_type=self.command_type,
            actor_id=actor_id,
            payload={"identity": self.identity},
            issued_at=issued_at,
            source_engine="directory",
            correlation_id=correlation_id,
        )


@dataclass(frozen=True)
class EnrollLibrarianRequest(_IdentityRequest):
    """Administrator grants the librarian tier."""
    command_type = DIRECTORY_LIBRARIAN_ENROLL_REQUEST


@dataclass(frozen=True)
class UnenrollLibrarianRequest(_IdentityRequest):
    """Administrator revokes the librarian tier (no-op if never granted)."""
    command_type = DIRECTORY_LIBRARIAN_UNENROLL_REQUEST


@dataclass(frozen=True)
class EnrollParticipantRequest(_IdentityRequest):
    command_type = DIRECTORY_PARTICIPANT_ENROLL_REQUEST


@dataclass(frozen=True)
class UnenrollParticipantRequest(_IdentityRequest):
    command_type = DIRECTORY_PARTICIPANT_UNENROLL_REQUEST
