"""Key-value storage seam for reputation scores.

The persistent store is an external collaborator; the core only needs
``get`` and ``set``. ``InMemoryStore`` is the default and what tests use.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: Hashable, default: int | None = None) -> int | None: ...

    def set(self, key: Hashable, value: int) -> None: ...

    def keys(self) -> Iterator[Hashable]: ...


class InMemoryStore:
    """Dict-backed store. Not persistent."""

    def __init__(self, initial: dict[Hashable, int] | None = None) -> None:
        self._data: dict[Hashable, int] = dict(initial or {})

    def get(self, key: Hashable, default: int | None = None) -> int | None:
        return self._data.get(key, default)

    def set(self, key: Hashable, value: int) -> None:
        self._data[key] = value

    def keys(self) -> Iterator[Hashable]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)
