"""
Versioned in-memory storage shared by all in-memory stores.

Each store owns a dict from id to aggregate and its own id allocator. Stores
of one backend share a re-entrant lock, so every operation, cascades
included, is a single critical section and no reader sees a half-applied
write.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from scouts.db.errors import NotFoundError, OptimisticLockError
from scouts.db.memory.ids import IdAllocator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryStore(Generic[T]):
    """Version-checked dict storage with the semantics of the relational stores."""

    entity: str = "Aggregate"

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._lock = lock or threading.RLock()
        self._rows: Dict[int, T] = {}
        self._ids = IdAllocator()
        self._delete_hooks: List[Callable[[int], None]] = []

    def on_delete(self, hook: Callable[[int], None]) -> None:
        """Call ``hook(id)`` inside the critical section whenever a row is deleted."""
        self._delete_hooks.append(hook)

    def create(self, aggregate: T) -> T:
        with self._lock:
            prepared = self._prepare(aggregate)
            new_id = self._ids.next_id()
            stored = prepared.model_copy(update={"id": new_id, "version": 0})
            self._rows[new_id] = stored
            logger.debug("Created %s %s", self.entity, new_id)
            return self._resolve(stored)

    def update(self, aggregate: T) -> T:
        with self._lock:
            current = self._rows.get(aggregate.id)
            if current is None:
                logger.warning("Update of missing %s %s rejected", self.entity, aggregate.id)
                raise NotFoundError(self.entity, aggregate.id)
            if current.version != aggregate.version:
                logger.warning(
                    "Stale update of %s %s at version %s rejected", self.entity, aggregate.id, aggregate.version
                )
                raise OptimisticLockError(self.entity, aggregate.id, aggregate.version)
            prepared = self._prepare(aggregate)
            stored = prepared.model_copy(update={"version": aggregate.version + 1})
            self._rows[aggregate.id] = stored
            logger.debug("Updated %s %s to version %s", self.entity, aggregate.id, stored.version)
            return self._resolve(stored)

    def delete(self, aggregate_id: int) -> None:
        with self._lock:
            if self._rows.pop(aggregate_id, None) is None:
                return
            for hook in self._delete_hooks:
                hook(aggregate_id)
            logger.debug("Deleted %s %s", self.entity, aggregate_id)

    def find_by_id(self, aggregate_id: int) -> Optional[T]:
        with self._lock:
            stored = self._rows.get(aggregate_id)
            return self._resolve(stored) if stored is not None else None

    def find_all(self) -> List[T]:
        return self._select(lambda stored: True)

    def exists(self, aggregate_id: int) -> bool:
        with self._lock:
            return aggregate_id in self._rows

    def reset(self) -> None:
        """Drop all rows and restart ids at 1. Test harnesses only."""
        with self._lock:
            self._rows.clear()
            self._ids.reset()

    def _select(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            return [self._resolve(self._rows[key]) for key in sorted(self._rows) if predicate(self._rows[key])]

    def _prepare(self, aggregate: T) -> T:
        """Validate references and return the value to store."""
        return aggregate

    def _resolve(self, stored: T) -> T:
        """Return the value readers see for a stored aggregate."""
        return stored
