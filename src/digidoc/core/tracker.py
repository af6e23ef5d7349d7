"""
Change tracker: which local objects already match remote state.

Objects are tracked by their surrogate ``key`` (assigned at construction),
never by value.  Two files with identical content are two entries.
"""

from __future__ import annotations

__all__ = ["Trackable", "Tracker", "new_key"]

import uuid
from collections.abc import Iterable
from typing import Protocol


def new_key() -> str:
    """Return a fresh surrogate key."""
    return uuid.uuid4().hex


class Trackable(Protocol):
    """Anything carrying a stable surrogate key."""

    @property
    def key(self) -> str: ...


class Tracker:
    """In-memory set of synchronized object keys.

    One tracker belongs to one :class:`~digidoc.api.Api`.  Entries are
    never removed.
    """

    def __init__(self) -> None:
        self._keys: set[str] = set()

    def has(self, obj: Trackable) -> bool:
        return obj.key in self._keys

    def add(self, objects: Trackable | Iterable[Trackable]) -> None:
        """Track a single object or every object of an iterable."""
        if hasattr(objects, "key"):
            self._keys.add(objects.key)  # type: ignore[union-attr]  # narrowed by hasattr
            return
        for obj in objects:  # type: ignore[union-attr]
            self._keys.add(obj.key)

    def __contains__(self, obj: object) -> bool:
        key = getattr(obj, "key", None)
        return key is not None and key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"Tracker({len(self._keys)} tracked)"
