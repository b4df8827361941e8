"""
Ledger Catalog Engine — Request Commands
==========================================
Typed catalog requests that convert into canonical Command objects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.commands.base import Command, build_command
from core.state.models import TEXT_FIELDS


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CATALOG_ITEM_ADD_REQUEST = "catalog.item.add.request"
CATALOG_ITEM_RETIRE_REQUEST = "catalog.item.retire.request"
CATALOG_ITEM_UPDATE_REQUEST = "catalog.item.update.request"

CATALOG_COMMAND_TYPES = frozenset({
    CATALOG_ITEM_ADD_REQUEST,
    CATALOG_ITEM_RETIRE_REQUEST,
    CATALOG_ITEM_UPDATE_REQUEST,
})


def _require_text(name: str, value) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string.")


def _require_item_id(item_id) -> None:
    if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id < 0:
        raise ValueError("item_id must be a non-negative integer.")


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AddItemRequest:
    """Create a catalog entry. The id is allocated by the engine."""
    title: str
    creator: str
    category: str
    description: str = ""

    def __post_init__(self):
        for name in TEXT_FIELDS:
            _require_text(name, getattr(self, name))

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return build_command(
            command_type=CATALOG_ITEM_ADD_REQUEST,
            actor_id=actor_id,
            payload={
                "title": self.title,
                "creator": self.creator,
                "category": self.category,
                "description": self.description,
            },
            issued_at=issued_at,
            source_engine="catalog",
            correlation_id=correlation_id,
        )


@dataclass(frozen=True)
class RetireItemRequest:
    """Soft-delete an item that is not out on loan."""
    item_id: int

    def __post_init__(self):
        _require_item_id(self.item_id)

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return build_command(
            command_type=CATALOG_ITEM_RETIRE_REQUEST,
            actor_id=actor_id,
            payload={"item_id": self.item_id},
            issued_at=issued_at,
            source_engine="catalog",
            correlation_id=correlation_id,
        )


@dataclass(frozen=True)
class UpdateItemFieldRequest:
    """Overwrite one descriptive field (title, creator, category, description)."""
    item_id: int
    field_name: str
    value: str

    def __post_init__(self):
        _require_item_id(self.item_id)
        if self.field_name not in TEXT_FIELDS:
            raise ValueError(
                f"field_name '{self.field_name}' not valid. "
                f"Must be one of: {sorted(TEXT_FIELDS)}"
            )
        _require_text("value", self.value)

    def to_command(
        self,
        *,
        actor_id: str,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return build_command(
            command_type=CATALOG_ITEM_UPDATE_REQUEST,
            actor_id=actor_id,
            payload={
                "item_id": self.item_id,
                "field_name": self.field_name,
                "value": self.value,
            },
            issued_at=issued_at,
            source_engine="catalog",
            correlation_id=correlation_id,
        )
