"""Protocol for the host runtime that supplies and routes work units."""

from __future__ import annotations

from typing import Protocol

from .types import Relationship, WorkUnit


class WorkSession(Protocol):
    """Host-side session handing out work units and accepting routed ones."""

    def get(self) -> WorkUnit | None:
        """Return the next available work unit, or None if there is none."""
        ...

    def transfer(self, work: WorkUnit, relationship: Relationship) -> None:
        """Route a processed work unit to one of the declared relationships."""
        ...
