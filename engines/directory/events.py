"""
Ledger Directory Engine — Event Types and Payload Builders
============================================================
"""

from __future__ import annotations

from core.commands.base import Command


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

LIBRARIAN_ENROLLED_V1 = "directory.librarian.enrolled.v1"
LIBRARIAN_UNENROLLED_V1 = "directory.librarian.unenrolled.v1"
PARTICIPANT_ENROLLED_V1 = "directory.participant.enrolled.v1"
PARTICIPANT_UNENROLLED_V1 = "directory.participant.unenrolled.v1"

DIRECTORY_EVENT_TYPES = (
    LIBRARIAN_ENROLLED_V1,
    LIBRARIAN_UNENROLLED_V1,
    PARTICIPANT_ENROLLED_V1,
    PARTICIPANT_UNENROLLED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "directory.librarian.enroll.request": LIBRARIAN_ENROLLED_V1,
    "directory.librarian.unenroll.request": LIBRARIAN_UNENROLLED_V1,
    "directory.participant.enroll.request": PARTICIPANT_ENROLLED_V1,
    "directory.participant.unenroll.request": PARTICIPANT_UNENROLLED_V1,
}


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_membership_payload(command: Command) -> dict:
    return {
        "identity": command.payload["identity"],
        "actor_id": command.actor_id,
        "command_id": str(command.command_id),
        "changed_at": command.issued_at.isoformat(),
    }


def build_participant_unenrolled_payload(command: Command, forgiven_penalty: int) -> dict:
    payload = build_membership_payload(command)
    payload["forgiven_penalty"] = forgiven_penalty
    return payload
