"""
Ledger Catalog Engine — Application Service
=============================================
Orchestrates catalog commands → policies → events → state.
"""

from __future__ import annotations

import logging

from core.commands.base import Command
from core.commands.bus import EngineResult
from core.commands.dispatcher import enforce_policies
from core.events.models import LedgerEvent
from core.permissions.access import AccessControl
from core.state.models import Item
from core.state.store import LedgerState
from engines.catalog.commands import (
    CATALOG_COMMAND_TYPES,
    CATALOG_ITEM_ADD_REQUEST,
    CATALOG_ITEM_RETIRE_REQUEST,
    CATALOG_ITEM_UPDATE_REQUEST,
)
from engines.catalog.events import (
    CATALOG_ITEM_ADDED_V1,
    CATALOG_ITEM_RETIRED_V1,
    CATALOG_ITEM_UPDATED_V1,
    COMMAND_TO_EVENT_TYPE,
    build_item_added_payload,
    build_item_retired_payload,
    build_item_updated_payload,
)
from engines.catalog.policies import ADD_ITEM_POLICIES, MUTATE_ITEM_POLICIES

logger = logging.getLogger("ledger.catalog")


POLICIES = {
    CATALOG_ITEM_ADD_REQUEST: ADD_ITEM_POLICIES,
    CATALOG_ITEM_RETIRE_REQUEST: MUTATE_ITEM_POLICIES,
    CATALOG_ITEM_UPDATE_REQUEST: MUTATE_ITEM_POLICIES,
}


class CatalogService:
    """Catalog engine service. Every accepted command produces one event."""

    command_types = CATALOG_COMMAND_TYPES

    def __init__(self, *, state: LedgerState, access: AccessControl):
        self._state = state
        self._access = access

    def execute(self, command: Command) -> EngineResult:
        event_type = COMMAND_TO_EVENT_TYPE[command.command_type]

        enforce_policies(command, POLICIES[command.command_type], self._state, self._access)

        value = None
        if event_type == CATALOG_ITEM_ADDED_V1:
            value = self._state.allocate_item_id()
            payload = build_item_added_payload(command, value)
        elif event_type == CATALOG_ITEM_RETIRED_V1:
            payload = build_item_retired_payload(command)
        else:
            item = self._state.live_item(command.payload["item_id"])
            previous = getattr(item, command.payload["field_name"])
            payload = build_item_updated_payload(command, previous)

        event = LedgerEvent.from_command(command, event_type, payload)
        self.apply(event)
        return EngineResult(events=(event,), value=value)

    def apply(self, event: LedgerEvent) -> None:
        payload = event.payload
        item_id = payload["item_id"]

        if event.event_type == CATALOG_ITEM_ADDED_V1:
            self._state.items[item_id] = Item(
                item_id=item_id,
                title=payload["title"],
                creator=payload["creator"],
                category=payload["category"],
                description=payload["description"],
                borrowed=False,
                exists=True,
            )
            logger.info(f"Item {item_id} added: {payload['title']!r}")

        elif event.event_type == CATALOG_ITEM_RETIRED_V1:
            self._state.items[item_id].retire()
            logger.info(f"Item {item_id} retired")

        elif event.event_type == CATALOG_ITEM_UPDATED_V1:
            setattr(self._state.items[item_id], payload["field_name"], payload["value"])
            logger.info(f"Item {item_id} {payload['field_name']} updated")
