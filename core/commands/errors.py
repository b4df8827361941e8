"""
Ledger Command Layer — Typed Rejections
=========================================
Every policy rejection surfaces to the caller as a subclass of
CommandRejectedError. The subclass is chosen by the reason code,
so callers can catch the precise failure (OnHold, Overdue, ...)
or the whole family at once.
"""

from __future__ import annotations

from core.commands.rejection import ReasonCode, RejectionReason


class CommandRejectedError(Exception):
    """Base error for a command denied by a policy."""

    code = "REJECTED"

    def __init__(self, reason: RejectionReason, command_type: str = ""):
        self.reason = reason
        self.command_type = command_type
        # REJECTED CommandOutcome, attached by the CommandBus once journaled.
        self.outcome = None
        super().__init__(f"[{reason.code}] {reason.message}")


class Unauthorized(CommandRejectedError):
    """Caller does not hold the role the operation requires."""
    code = ReasonCode.UNAUTHORIZED


class InvalidRole(CommandRejectedError):
    """Identity already occupies a mutually exclusive role."""
    code = ReasonCode.INVALID_ROLE


class NotEnrolled(CommandRejectedError):
    code = ReasonCode.NOT_ENROLLED


class NotFound(CommandRejectedError):
    """Referenced item was never created or has been retired."""
    code = ReasonCode.NOT_FOUND


class ItemBorrowed(CommandRejectedError):
    """Catalog mutation attempted on an item that is out on loan."""
    code = ReasonCode.ITEM_BORROWED


class AlreadyBorrowed(CommandRejectedError):
    code = ReasonCode.ALREADY_BORROWED


class OnHold(CommandRejectedError):
    code = ReasonCode.ON_HOLD


class PenaltyOutstanding(CommandRejectedError):
    code = ReasonCode.PENALTY_OUTSTANDING


class HasActiveLoan(CommandRejectedError):
    code = ReasonCode.HAS_ACTIVE_LOAN


class HasHold(CommandRejectedError):
    code = ReasonCode.HAS_HOLD


class NoActiveLoan(CommandRejectedError):
    code = ReasonCode.NO_ACTIVE_LOAN


class Overdue(CommandRejectedError):
    code = ReasonCode.OVERDUE


class NothingToPay(CommandRejectedError):
    code = ReasonCode.NOTHING_TO_PAY


_ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        Unauthorized,
        InvalidRole,
        NotEnrolled,
        NotFound,
        ItemBorrowed,
        AlreadyBorrowed,
        OnHold,
        PenaltyOutstanding,
        HasActiveLoan,
        HasHold,
        NoActiveLoan,
        Overdue,
        NothingToPay,
    )
}


def error_for(reason: RejectionReason, command_type: str = "") -> CommandRejectedError:
    """Build the typed exception matching reason.code."""
    error_cls = _ERRORS_BY_CODE.get(reason.code, CommandRejectedError)
    return error_cls(reason, command_type)


def raise_rejection(reason: RejectionReason, command_type: str = "") -> None:
    raise error_for(reason, command_type)
