"""
Ledger Directory Engine — Application Service
===============================================
Maintains the role table, the participant records' enrollment flag
and the enumerable participant registry, always together.
"""

from __future__ import annotations

import logging
from typing import Tuple

from core.commands.base import Command
from core.commands.bus import EngineResult
from core.commands.dispatcher import enforce_policies
from core.events.models import LedgerEvent
from core.permissions.access import AccessControl
from core.permissions.roles import Role
from core.state.store import LedgerState
from engines.directory.commands import (
    DIRECTORY_COMMAND_TYPES,
    DIRECTORY_LIBRARIAN_ENROLL_REQUEST,
    DIRECTORY_LIBRARIAN_UNENROLL_REQUEST,
    DIRECTORY_PARTICIPANT_ENROLL_REQUEST,
    DIRECTORY_PARTICIPANT_UNENROLL_REQUEST,
)
from engines.directory.events import (
    COMMAND_TO_EVENT_TYPE,
    LIBRARIAN_ENROLLED_V1,
    LIBRARIAN_UNENROLLED_V1,
    PARTICIPANT_ENROLLED_V1,
    PARTICIPANT_UNENROLLED_V1,
    build_membership_payload,
    build_participant_unenrolled_payload,
)
from engines.directory.policies import (
    ENROLL_LIBRARIAN_POLICIES,
    ENROLL_PARTICIPANT_POLICIES,
    UNENROLL_LIBRARIAN_POLICIES,
    UNENROLL_PARTICIPANT_POLICIES,
)

logger = logging.getLogger("ledger.directory")


POLICIES = {
    DIRECTORY_LIBRARIAN_ENROLL_REQUEST: ENROLL_LIBRARIAN_POLICIES,
    DIRECTORY_LIBRARIAN_UNENROLL_REQUEST: UNENROLL_LIBRARIAN_POLICIES,
    DIRECTORY_PARTICIPANT_ENROLL_REQUEST: ENROLL_PARTICIPANT_POLICIES,
    DIRECTORY_PARTICIPANT_UNENROLL_REQUEST: UNENROLL_PARTICIPANT_POLICIES,
}


class DirectoryService:
    """
    Directory engine service.

    Commands that would not change anything (re-enrolling a librarian,
    unenrolling a librarian that was never enrolled, re-enrolling an
    enrolled participant) are accepted silently and emit no event.
    """

    command_types = DIRECTORY_COMMAND_TYPES

    def __init__(self, *, state: LedgerState, access: AccessControl):
        self._state = state
        self._access = access

    def execute(self, command: Command) -> EngineResult:
        event_type = COMMAND_TO_EVENT_TYPE[command.command_type]

        enforce_policies(command, POLICIES[command.command_type], self._state, self._access)

        identity = command.payload["identity"]
        if self._is_noop(event_type, identity):
            logger.debug(f"{command.command_type} for '{identity}' changes nothing")
            return EngineResult()

        if event_type == PARTICIPANT_UNENROLLED_V1:
            record = self._state.participant(identity)
            payload = build_participant_unenrolled_payload(command, record.penalty_balance)
        else:
            payload = build_membership_payload(command)

        event = LedgerEvent.from_command(command, event_type, payload)
        self.apply(event)
        return EngineResult(events=(event,))

    def _is_noop(self, event_type: str, identity: str) -> bool:
        role = self._access.role_of(identity)
        if event_type == LIBRARIAN_ENROLLED_V1:
            return role is Role.LIBRARIAN
        if event_type == LIBRARIAN_UNENROLLED_V1:
            return role is not Role.LIBRARIAN
        if event_type == PARTICIPANT_ENROLLED_V1:
            return self._state.is_enrolled(identity) and identity in self._state.registry
        return False

    def apply(self, event: LedgerEvent) -> None:
        identity = event.payload["identity"]
        roles = self._state.roles

        if event.event_type == LIBRARIAN_ENROLLED_V1:
            roles.assign(identity, Role.LIBRARIAN)
            logger.info(f"Librarian enrolled: {identity}")

        elif event.event_type == LIBRARIAN_UNENROLLED_V1:
            roles.clear(identity, Role.LIBRARIAN)
            logger.info(f"Librarian unenrolled: {identity}")

        elif event.event_type == PARTICIPANT_ENROLLED_V1:
            record = self._state.ensure_participant(identity)
            record.enrolled = True
            roles.assign(identity, Role.PARTICIPANT)
            self._state.registry.add(identity)
            logger.info(f"Participant enrolled: {identity}")

        elif event.event_type == PARTICIPANT_UNENROLLED_V1:
            record = self._state.participant(identity)
            forgiven = event.payload["forgiven_penalty"]
            if forgiven:
                logger.info(f"Penalty of {forgiven} forgiven for '{identity}' on unenrollment")
            record.penalty_balance = 0
            record.enrolled = False
            roles.clear(identity, Role.PARTICIPANT)
            self._state.registry.remove(identity)
            logger.info(f"Participant unenrolled: {identity}")

    def list_participants(self) -> Tuple[str, ...]:
        return self._state.registry.snapshot()
