"""Ordered collections of files and signatures held by a container."""

from __future__ import annotations

__all__ = ["FileCollection", "SignatureCollection"]

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from .entities import File
from .signature import Signature

_T = TypeVar("_T")


class _Collection(Generic[_T]):
    """Insertion-ordered list with the few queries the Api needs."""

    def __init__(self, items: Iterable[_T] = ()) -> None:
        self._items: list[_T] = list(items)

    def add(self, item: _T) -> None:
        self._items.append(item)

    def filter(self, predicate: Callable[[_T], bool]) -> list[_T]:
        return [item for item in self._items if predicate(item)]

    def first(self) -> _T | None:
        return self._items[0] if self._items else None

    def to_list(self) -> list[_T]:
        return list(self._items)

    def __iter__(self) -> Iterator[_T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> _T:
        return self._items[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


class FileCollection(_Collection[File]):
    pass


class SignatureCollection(_Collection[Signature]):
    def get_sealable(self) -> list[Signature]:
        """Signatures that have a challenge and a solution but are not sealed."""
        return self.filter(lambda signature: signature.is_sealable)
