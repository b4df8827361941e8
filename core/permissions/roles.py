"""
Ledger Permissions — Tagged Role Table
========================================
One identity → exactly one of {ADMINISTRATOR, LIBRARIAN, PARTICIPANT, NONE}.

Exclusivity is structural: an identity has a single tag, so it can
never be a librarian and a participant at once. The administrator
is fixed at construction and can never be reassigned or cleared.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Role(Enum):
    NONE = "NONE"
    ADMINISTRATOR = "ADMINISTRATOR"
    LIBRARIAN = "LIBRARIAN"
    PARTICIPANT = "PARTICIPANT"


ASSIGNABLE_ROLES = frozenset({Role.LIBRARIAN, Role.PARTICIPANT})


class RoleTable:
    def __init__(self, administrator: str) -> None:
        if not administrator or not isinstance(administrator, str):
            raise ValueError("administrator must be a non-empty string.")
        self._administrator = administrator
        self._tags: Dict[str, Role] = {}

    @property
    def administrator(self) -> str:
        return self._administrator

    def role_of(self, identity: str) -> Role:
        if identity == self._administrator:
            return Role.ADMINISTRATOR
        return self._tags.get(identity, Role.NONE)

    def assign(self, identity: str, role: Role) -> None:
        """
        Tag identity with role, replacing NONE.

        Raises ValueError for the administrator identity, for a
        non-assignable role, or if identity already holds another tag.
        Callers check these conditions first and reject with a reason;
        reaching the ValueError means a policy was skipped.
        """
        if role not in ASSIGNABLE_ROLES:
            raise ValueError(f"Role {role.name} cannot be assigned.")
        current = self.role_of(identity)
        if current not in (Role.NONE, role):
            raise ValueError(
                f"Identity '{identity}' already holds role {current.name}."
            )
        self._tags[identity] = role

    def clear(self, identity: str, role: Role) -> bool:
        """Drop identity's tag if it is `role`. Returns whether it was."""
        if self._tags.get(identity) is role:
            del self._tags[identity]
            return True
        return False

    def holders(self, role: Role) -> Tuple[str, ...]:
        if role is Role.ADMINISTRATOR:
            return (self._administrator,)
        return tuple(sorted(i for i, tag in self._tags.items() if tag is role))
