"""
Ledger Permissions — Access Control
=====================================
Authority predicates shared by every engine.

Each predicate is a pure read of the current state, evaluated fresh
on every call (no caching), and returns None when the check passes
or a RejectionReason when it fails. Predicates never mutate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.permissions.roles import Role

if TYPE_CHECKING:
    from core.state.store import LedgerState


class AccessControl:
    def __init__(self, state: "LedgerState") -> None:
        self._state = state

    def role_of(self, identity: str) -> Role:
        return self._state.roles.role_of(identity)

    def is_administrator(self, identity: str) -> bool:
        return self.role_of(identity) is Role.ADMINISTRATOR

    def is_librarian(self, identity: str) -> bool:
        return self.role_of(identity) is Role.LIBRARIAN

    def require_administrator(self, caller: str) -> Optional[RejectionReason]:
        if self.is_administrator(caller):
            return None
        return RejectionReason(
            code=ReasonCode.UNAUTHORIZED,
            message=f"'{caller}' is not the administrator.",
            policy_name="require_administrator",
        )

    def require_librarian(self, caller: str) -> Optional[RejectionReason]:
        if self.is_librarian(caller):
            return None
        return RejectionReason(
            code=ReasonCode.UNAUTHORIZED,
            message=f"'{caller}' is not a librarian.",
            policy_name="require_librarian",
        )

    def require_administrator_or_librarian(self, caller: str) -> Optional[RejectionReason]:
        if self.is_administrator(caller) or self.is_librarian(caller):
            return None
        return RejectionReason(
            code=ReasonCode.UNAUTHORIZED,
            message=f"'{caller}' is neither the administrator nor a librarian.",
            policy_name="require_administrator_or_librarian",
        )

    def require_enrolled_participant(self, identity: str) -> Optional[RejectionReason]:
        if self._state.is_enrolled(identity):
            return None
        return RejectionReason(
            code=ReasonCode.NOT_ENROLLED,
            message=f"'{identity}' is not an enrolled participant.",
            policy_name="require_enrolled_participant",
        )
