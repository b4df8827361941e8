"""
Ledger Event Bus — Dispatcher
===============================
Delivers journaled events to subscribers, one handler at a time,
in registration order (specific subscribers before '*').

By the time an event is dispatched the ledger has already changed.
A handler that raises is logged and counted in the report; the
remaining handlers still run and the command stays accepted.

Ordering holds per command only: dispatch runs after the ledger lock
is released, so concurrent commands may be heard out of journal order.
"""

import logging
from typing import Iterable, List

from core.events.models import LedgerEvent
from core.events.registry import SubscriberRegistry

logger = logging.getLogger("ledger.events")


def _handler_name(handler) -> str:
    return getattr(handler, "__qualname__", repr(handler))


def dispatch(event: LedgerEvent, registry: SubscriberRegistry) -> dict:
    """
    Deliver one event. Never raises.

    Report shape:
        event_type, event_id,
        subscribers_notified / subscribers_failed (counts),
        failures: [{handler, subscriber, error, error_type}, ...]
    """
    report = {
        "event_type": event.event_type,
        "event_id": str(event.event_id),
        "subscribers_notified": 0,
        "subscribers_failed": 0,
        "failures": [],
    }

    for handler, subscriber_name in registry.get_subscribers(event.event_type):
        try:
            handler(event)
        except Exception as exc:
            name = _handler_name(handler)
            report["subscribers_failed"] += 1
            report["failures"].append({
                "handler": name,
                "subscriber": subscriber_name,
                "error": str(exc),
                "error_type": type(exc).__name__,
            })
            logger.error(
                f"Subscriber '{subscriber_name}' ({name}) failed on "
                f"{event.event_type} [{report['event_id']}]: {exc}",
                exc_info=True,
            )
        else:
            report["subscribers_notified"] += 1

    if report["subscribers_notified"] or report["subscribers_failed"]:
        logger.debug(
            f"{event.event_type} delivered to {report['subscribers_notified']} "
            f"subscriber(s), {report['subscribers_failed']} failed"
        )
    return report


def dispatch_all(events: Iterable[LedgerEvent], registry: SubscriberRegistry) -> List[dict]:
    """Deliver one command's events in the order given, one report per event."""
    return [dispatch(event, registry) for event in events]
