"""
Ledger Command Layer — Command Bus
====================================
Routes a Command to the engine service that owns its command_type
and makes the whole operation all-or-nothing.

Lifecycle of one command:
1. Look up the engine service for command_type
2. Acquire the ledger lock (one command at a time, no interleaving)
3. service.execute(command): policies first, then mutation
4. ACCEPTED → journal the emitted events
   REJECTED → journal a '<...>.rejected' record, re-raise the typed error
5. Release the lock
6. Dispatch accepted events to subscribers (outside the lock)

One command's events reach subscribers in journal order. Events of
two concurrent commands may interleave differently than the journal;
readers that need the authoritative order use the journal itself.
Subscribers may query the ledger or submit commands.

Engine services must evaluate every policy before the first
mutation, so a rejection never leaves partial state behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, Dict, List, Protocol, Tuple, TypeVar

from core.commands.base import Command, derive_rejection_event_type
from core.commands.errors import CommandRejectedError
from core.commands.outcomes import CommandOutcome
from core.events.dispatcher import dispatch_all
from core.events.models import LedgerEvent
from core.events.registry import SubscriberRegistry

logger = logging.getLogger("ledger.commands")

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════
# PROTOCOLS / RESULTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EngineResult:
    """What an engine service hands back for an accepted command."""
    events: Tuple[LedgerEvent, ...] = ()
    value: Any = None


class EngineServiceProtocol(Protocol):
    def execute(self, command: Command) -> EngineResult:
        ...  # pragma: no cover


class JournalProtocol(Protocol):
    def record(self, event: LedgerEvent) -> None:
        ...  # pragma: no cover


@dataclass(frozen=True)
class CommandResult:
    outcome: CommandOutcome
    events: Tuple[LedgerEvent, ...] = ()
    value: Any = None
    dispatch_reports: Tuple[dict, ...] = field(default_factory=tuple)

    @property
    def is_accepted(self) -> bool:
        return self.outcome.is_accepted


class CommandBusError(Exception):
    """Base error for command bus operations."""
    pass


class NoHandlerRegistered(CommandBusError):
    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"No engine service registered for command type '{command_type}'."
        )


# ══════════════════════════════════════════════════════════════
# COMMAND BUS
# ══════════════════════════════════════════════════════════════

class CommandBus:
    """
    Usage:
        bus = CommandBus(journal=state, subscribers=SubscriberRegistry())
        bus.register_handler("catalog.item.add.request", catalog_service)
        result = bus.handle(command)
    """

    def __init__(self, journal: JournalProtocol, subscribers: SubscriberRegistry):
        self._journal = journal
        self._subscribers = subscribers
        self._handlers: Dict[str, EngineServiceProtocol] = {}
        self._lock = Lock()

    def register_handler(self, command_type: str, handler: EngineServiceProtocol) -> None:
        if not command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{command_type}' must end with '.request'."
            )

        if not hasattr(handler, "execute") or not callable(handler.execute):
            raise TypeError("Handler must have callable .execute() method.")

        self._handlers[command_type] = handler
        logger.debug(f"Handler registered: {command_type}")

    def register_engine(self, command_types, handler: EngineServiceProtocol) -> None:
        for command_type in command_types:
            self.register_handler(command_type, handler)

    @property
    def command_types(self) -> frozenset:
        return frozenset(self._handlers)

    def read(self, query: Callable[[], T]) -> T:
        """Run a read-only query under the command lock, so it never sees half an apply."""
        with self._lock:
            return query()

    def handle(self, command: Command) -> CommandResult:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise NoHandlerRegistered(command.command_type)

        with self._lock:
            try:
                engine_result = handler.execute(command)
            except CommandRejectedError as exc:
                exc.outcome = CommandOutcome.rejected(command, exc.reason)
                self._record_rejection(command, exc)
                raise

            for event in engine_result.events:
                self._journal.record(event)

        logger.info(
            f"Command {command.command_id} ACCEPTED ({command.command_type}, "
            f"actor: {command.actor_id})"
        )

        reports: List[dict] = dispatch_all(engine_result.events, self._subscribers)

        return CommandResult(
            outcome=CommandOutcome.accepted(command),
            events=engine_result.events,
            value=engine_result.value,
            dispatch_reports=tuple(reports),
        )

    def _record_rejection(self, command: Command, exc: CommandRejectedError) -> None:
        """
        Rejections are first-class journal entries. They touch nothing
        but the journal.
        """
        rejection_event = LedgerEvent.from_command(
            command,
            derive_rejection_event_type(command.command_type),
            {
                "command_id": str(command.command_id),
                "command_type": command.command_type,
                "rejection": exc.reason.to_dict(),
                "original_payload": dict(command.payload),
            },
        )
        self._journal.record(rejection_event)
        logger.info(
            f"Command {command.command_id} REJECTED ({command.command_type}, "
            f"actor: {command.actor_id}): {exc.reason.code}"
        )
