"""
Ledger Event Bus — Subscriber Registry
========================================
Who wants to hear about what. Typical subscribers are a penalty
notifier on 'lending.penalty.accrued.v1' or an audit tap on '*'.

Subscriptions are validated when made, held in memory, and
guarded by a lock so they can be added while commands are running.
"""

import logging
from threading import Lock
from typing import Callable, Dict, List, Tuple

from core.events.errors import (
    DuplicateSubscription,
    InvalidSubscriptionType,
    SubscriptionError,
)

logger = logging.getLogger("ledger.events")

ALL_EVENTS = "*"

Subscription = Tuple[Callable, str]


def _is_valid_event_type(event_type) -> bool:
    if event_type == ALL_EVENTS:
        return True
    if not isinstance(event_type, str):
        return False
    segments = event_type.split(".")
    return len(segments) >= 3 and all(segments)


class SubscriberRegistry:
    def __init__(self):
        self._by_type: Dict[str, List[Subscription]] = {}
        self._lock = Lock()

    def register_subscriber(self, event_type: str, handler: Callable, subscriber_name: str) -> None:
        """
        Listen to one event type, or to every type with '*'.

        Raises:
            InvalidSubscriptionType: not '*' and not engine.domain.action[.vN]
            SubscriptionError:       handler is not callable
            DuplicateSubscription:   this handler object already listens here
        """
        if not _is_valid_event_type(event_type):
            raise InvalidSubscriptionType(str(event_type or ""))
        if not callable(handler):
            raise SubscriptionError(
                f"Subscriber '{subscriber_name}' passed a non-callable handler "
                f"({type(handler).__name__})."
            )

        handler_name = getattr(handler, "__qualname__", repr(handler))
        with self._lock:
            subscriptions = self._by_type.setdefault(event_type, [])
            if any(existing is handler for existing, _ in subscriptions):
                raise DuplicateSubscription(event_type, handler_name, subscriber_name)
            subscriptions.append((handler, subscriber_name))

        logger.info(f"'{subscriber_name}' subscribed to {event_type} ({handler_name})")

    def get_subscribers(self, event_type: str) -> List[Subscription]:
        """Specific subscriptions first, then '*'. Empty when nobody listens."""
        with self._lock:
            return list(self._by_type.get(event_type, ())) + list(self._by_type.get(ALL_EVENTS, ()))

    def has_subscribers(self, event_type: str) -> bool:
        return bool(self.get_subscribers(event_type))

    def subscriber_count(self, event_type: str) -> int:
        """Subscriptions made for exactly this type ('*' not included)."""
        with self._lock:
            return len(self._by_type.get(event_type, ()))
