"""In-memory event store."""

from __future__ import annotations

import threading
from typing import List, Optional

from scouts.db.memory.base import InMemoryStore
from scouts.db.memory.groups import InMemoryGroupStore
from scouts.db.repositories.base import EventStore
from scouts.db.schemas import Event


class InMemoryEventStore(InMemoryStore[Event], EventStore):
    """Events keep their groups in the stored value; reads show each group's current state."""

    entity = "Event"

    def __init__(self, groups: InMemoryGroupStore, lock: Optional[threading.RLock] = None) -> None:
        super().__init__(lock)
        self._groups = groups
        groups.on_delete(self._detach_group)

    def find_by_group_id(self, group_id: int) -> List[Event]:
        return self._select(lambda event: group_id in event.group_ids)

    def _prepare(self, event: Event) -> Event:
        return event.model_copy(update={"participating_groups": self._groups.require_all(event.participating_groups)})

    def _resolve(self, stored: Event) -> Event:
        return stored.model_copy(update={"participating_groups": self._groups.current(stored.participating_groups)})

    def _detach_group(self, group_id: int) -> None:
        with self._lock:
            for event_id, event in list(self._rows.items()):
                if group_id in event.group_ids:
                    remaining = frozenset(g for g in event.participating_groups if g.id != group_id)
                    self._rows[event_id] = event.model_copy(update={"participating_groups": remaining})
