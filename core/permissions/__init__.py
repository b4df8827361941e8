"""
Ledger Permissions — Public API
=================================
Three tiers: administrator, librarian, participant.
"""

from core.permissions.access import AccessControl
from core.permissions.roles import ASSIGNABLE_ROLES, Role, RoleTable

__all__ = [
    "AccessControl",
    "ASSIGNABLE_ROLES",
    "Role",
    "RoleTable",
]
