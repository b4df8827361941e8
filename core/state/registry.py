"""
Ledger State — Participant Registry
=====================================
Enumerable, duplicate-free set of enrolled identities.

Removal swaps the leaving identity with the last entry and
truncates, so enumeration order is NOT stable across removals.
The registry is only ever enumerated, never indexed by callers.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple


class ParticipantRegistry:
    def __init__(self) -> None:
        self._identities: List[str] = []
        self._positions: Dict[str, int] = {}

    def add(self, identity: str) -> bool:
        """Append identity. Returns False (and changes nothing) if present."""
        if identity in self._positions:
            return False
        self._positions[identity] = len(self._identities)
        self._identities.append(identity)
        return True

    def remove(self, identity: str) -> bool:
        """Swap-with-last and truncate. Returns False if absent."""
        position = self._positions.pop(identity, None)
        if position is None:
            return False
        last = self._identities.pop()
        if last != identity:
            self._identities[position] = last
            self._positions[last] = position
        return True

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._identities)

    def __contains__(self, identity: object) -> bool:
        return identity in self._positions

    def __len__(self) -> int:
        return len(self._identities)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
