from __future__ import annotations

import copy
from typing import Protocol


class KeyedStore(Protocol):
    """Collection-level persistence: every save replaces the whole list for a key.

    ``load`` returns ``[]`` for a key that was never saved.
    """

    def load(self, key: str) -> list[dict]:
        raise NotImplementedError

    def save(self, key: str, items: list[dict]) -> None:
        raise NotImplementedError


class InMemoryKeyedStore(KeyedStore):
    def __init__(self, initial: dict[str, list[dict]] | None = None):
        self._data: dict[str, list[dict]] = copy.deepcopy(initial or {})
        self.save_count = 0

    def load(self, key: str) -> list[dict]:
        return copy.deepcopy(self._data.get(key, []))

    def save(self, key: str, items: list[dict]) -> None:
        self._data[key] = copy.deepcopy(list(items))
        self.save_count += 1
