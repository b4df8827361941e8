"""
Ledger Event Bus — Subscription Errors
========================================
Raised while wiring subscribers, never while dispatching:
a journaled event is delivered best-effort and cannot fail the command.
"""


class SubscriptionError(Exception):
    """Base error for subscriber registration."""


class InvalidSubscriptionType(SubscriptionError):
    """Subscribed to something that is neither '*' nor engine.domain.action[.vN]."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Cannot subscribe to '{event_type}': expected '*' or "
            f"engine.domain.action[.vN]."
        )


class DuplicateSubscription(SubscriptionError):
    """The same handler object is already listening to this event type."""

    def __init__(self, event_type: str, handler_name: str, subscriber_name: str):
        self.event_type = event_type
        self.handler_name = handler_name
        self.subscriber_name = subscriber_name
        super().__init__(
            f"'{subscriber_name}' already listens to '{event_type}' "
            f"with handler {handler_name}."
        )
