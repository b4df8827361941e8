"""
Tests for core.events — subscriber registry and dispatcher.
"""

from datetime import datetime, timezone

import pytest

from core.events import (
    ALL_EVENTS,
    DuplicateSubscription,
    InvalidSubscriptionType,
    SubscriptionError,
    LedgerEvent,
    SubscriberRegistry,
    dispatch,
    dispatch_all,
)

NOW = datetime(2026, 2, 19, 12, 0, 0, tzinfo=timezone.utc)


def make_event(event_type="lending.penalty.accrued.v1", **payload):
    return LedgerEvent(
        event_type=event_type,
        actor_id="alice",
        occurred_at=NOW,
        source_engine=event_type.split(".")[0],
        payload=payload,
    )


class TestSubscriberRegistry:
    def test_register_and_lookup(self):
        registry = SubscriberRegistry()
        handler = lambda event: None
        registry.register_subscriber("lending.penalty.accrued.v1", handler, "mailer")
        assert registry.get_subscribers("lending.penalty.accrued.v1") == [(handler, "mailer")]
        assert registry.has_subscribers("lending.penalty.accrued.v1")
        assert not registry.has_subscribers("lending.item.borrowed.v1")

    def test_wildcard_receives_everything(self):
        registry = SubscriberRegistry()
        specific = lambda event: None
        audit = lambda event: None
        registry.register_subscriber("catalog.item.added.v1", specific, "x")
        registry.register_subscriber(ALL_EVENTS, audit, "audit")
        assert registry.get_subscribers("catalog.item.added.v1") == [(specific, "x"), (audit, "audit")]
        assert registry.get_subscribers("lending.item.borrowed.v1") == [(audit, "audit")]

    @pytest.mark.parametrize("bad", ["", "lending", "lending.penalty", "lending..v1"])
    def test_rejects_bad_event_type(self, bad):
        with pytest.raises(InvalidSubscriptionType):
            SubscriberRegistry().register_subscriber(bad, lambda e: None, "x")

    def test_rejects_duplicate_handler(self):
        registry = SubscriberRegistry()
        handler = lambda event: None
        registry.register_subscriber("lending.penalty.accrued.v1", handler, "x")
        with pytest.raises(DuplicateSubscription):
            registry.register_subscriber("lending.penalty.accrued.v1", handler, "y")

    def test_rejects_non_callable(self):
        with pytest.raises(SubscriptionError):
            SubscriberRegistry().register_subscriber("lending.penalty.accrued.v1", "nope", "x")

    def test_subscriber_count(self):
        registry = SubscriberRegistry()
        registry.register_subscriber("lending.penalty.accrued.v1", lambda e: None, "a")
        registry.register_subscriber("lending.penalty.accrued.v1", lambda e: None, "b")
        assert registry.subscriber_count("lending.penalty.accrued.v1") == 2


class TestDispatch:
    def test_no_subscribers(self):
        result = dispatch(make_event(), SubscriberRegistry())
        assert result["subscribers_notified"] == 0
        assert result["failures"] == []

    def test_failing_subscriber_does_not_stop_others(self):
        registry = SubscriberRegistry()
        heard = []

        def broken(event):
            raise RuntimeError("mail server down")

        registry.register_subscriber("lending.penalty.accrued.v1", broken, "mailer")
        registry.register_subscriber("lending.penalty.accrued.v1", heard.append, "ledger-ui")

        event = make_event(amount=10)
        result = dispatch(event, registry)

        assert heard == [event]
        assert result["subscribers_notified"] == 1
        assert result["subscribers_failed"] == 1
        assert result["failures"][0]["error_type"] == "RuntimeError"
        assert result["failures"][0]["subscriber"] == "mailer"

    def test_dispatch_all_keeps_order(self):
        registry = SubscriberRegistry()
        heard = []
        registry.register_subscriber(ALL_EVENTS, heard.append, "audit")
        events = [make_event("lending.penalty.accrued.v1"), make_event("lending.item.returned.v1")]
        reports = dispatch_all(events, registry)
        assert heard == events
        assert [r["event_type"] for r in reports] == [
            "lending.penalty.accrued.v1", "lending.item.returned.v1",
        ]


class TestLedgerEvent:
    def test_to_dict(self):
        event = make_event(amount=10)
        data = event.to_dict()
        assert data["event_type"] == "lending.penalty.accrued.v1"
        assert data["occurred_at"] == NOW.isoformat()
        assert data["payload"] == {"amount": 10}
        assert data["command_id"] is None
