"""
Name: In-Memory Repository Base

Responsibilities:
  - Store entities in a dict keyed by id, guarded by a Lock
  - Provide the shared CRUD contract (get/add/update/delete/list)
  - Return deterministic ordering (newest first, then id)

Constraints:
  - Thread-safe: every read/write happens under the lock
  - Pure storage: no business rules, no RBAC
  - Data is lost on process restart (tests / local dev)
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryRepository(Generic[T]):
    def __init__(self) -> None:
        self._lock = Lock()
        self._items: Dict[str, T] = {}

    @staticmethod
    def _sort_key(entity: T):
        created = getattr(entity, "created_at", None) or _EPOCH
        return (-created.timestamp(), getattr(entity, "id", ""))

    @classmethod
    def _sorted(cls, items: Iterable[T]) -> List[T]:
        return sorted(items, key=cls._sort_key)

    def get(self, entity_id: str) -> Optional[T]:
        with self._lock:
            return self._items.get(entity_id)

    def add(self, entity: T) -> T:
        with self._lock:
            self._items[entity.id] = entity
        return entity

    def update(self, entity: T) -> T:
        with self._lock:
            if entity.id not in self._items:
                raise KeyError(entity.id)
            self._items[entity.id] = entity
        return entity

    def delete(self, entity_id: str) -> bool:
        with self._lock:
            return self._items.pop(entity_id, None) is not None

    def list(self, predicate: Callable[[T], bool] | None = None) -> List[T]:
        with self._lock:
            values = list(self._items.values())
        if predicate is not None:
            values = [v for v in values if predicate(v)]
        return self._sorted(values)

    def count(self) -> int:
        with self._lock:
            return len(self._items)
