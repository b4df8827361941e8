"""
Ledger Catalog Engine — Event Types and Payload Builders
==========================================================
"""

from __future__ import annotations

from core.commands.base import Command


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CATALOG_ITEM_ADDED_V1 = "catalog.item.added.v1"
CATALOG_ITEM_RETIRED_V1 = "catalog.item.retired.v1"
CATALOG_ITEM_UPDATED_V1 = "catalog.item.updated.v1"

CATALOG_EVENT_TYPES = (
    CATALOG_ITEM_ADDED_V1,
    CATALOG_ITEM_RETIRED_V1,
    CATALOG_ITEM_UPDATED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "catalog.item.add.request": CATALOG_ITEM_ADDED_V1,
    "catalog.item.retire.request": CATALOG_ITEM_RETIRED_V1,
    "catalog.item.update.request": CATALOG_ITEM_UPDATED_V1,
}


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def _base_payload(command: Command) -> dict:
    return {
        "actor_id": command.actor_id,
        "command_id": str(command.command_id),
        "correlation_id": str(command.correlation_id),
    }


def build_item_added_payload(command: Command, item_id: int) -> dict:
    payload = _base_payload(command)
    payload.update({
        "item_id": item_id,
        "title": command.payload["title"],
        "creator": command.payload["creator"],
        "category": command.payload["category"],
        "description": command.payload["description"],
        "added_at": command.issued_at.isoformat(),
    })
    return payload


def build_item_retired_payload(command: Command) -> dict:
    payload = _base_payload(command)
    payload.update({
        "item_id": command.payload["item_id"],
        "retired_at": command.issued_at.isoformat(),
    })
    return payload


def build_item_updated_payload(command: Command, previous_value: str) -> dict:
    payload = _base_payload(command)
    payload.update({
        "item_id": command.payload["item_id"],
        "field_name": command.payload["field_name"],
        "value": command.payload["value"],
        "previous_value": previous_value,
        "updated_at": command.issued_at.isoformat(),
    })
    return payload
