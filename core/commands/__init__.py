"""
Ledger Command Layer — Public API
===================================
Every call on the ledger becomes a Command.
Every handled Command is either accepted or rejected with a reason.
"""

from core.commands.base import (
    Command,
    build_command,
    derive_rejection_event_type,
    derive_source_engine,
)
from core.commands.bus import (
    CommandBus,
    CommandBusError,
    CommandResult,
    EngineResult,
    NoHandlerRegistered,
)
from core.commands.dispatcher import enforce_policies, first_rejection
from core.commands.errors import CommandRejectedError, error_for, raise_rejection
from core.commands.outcomes import CommandOutcome, CommandStatus
from core.commands.rejection import ReasonCode, RejectionReason

__all__ = [
    "Command",
    "build_command",
    "derive_rejection_event_type",
    "derive_source_engine",
    "CommandBus",
    "CommandBusError",
    "CommandResult",
    "EngineResult",
    "NoHandlerRegistered",
    "enforce_policies",
    "first_rejection",
    "CommandRejectedError",
    "error_for",
    "raise_rejection",
    "CommandOutcome",
    "CommandStatus",
    "ReasonCode",
    "RejectionReason",
]
