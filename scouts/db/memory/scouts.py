"""In-memory scout store."""

from __future__ import annotations

import threading
from typing import List, Optional

from scouts.db.memory.base import InMemoryStore
from scouts.db.memory.groups import InMemoryGroupStore
from scouts.db.repositories.base import ScoutStore
from scouts.db.schemas import Scout


class InMemoryScoutStore(InMemoryStore[Scout], ScoutStore):
    entity = "Scout"

    def __init__(self, groups: InMemoryGroupStore, lock: Optional[threading.RLock] = None) -> None:
        super().__init__(lock)
        self._groups = groups
        groups.on_delete(self._detach_group)

    def find_by_name(self, name: str) -> List[Scout]:
        term = name.casefold()
        return self._select(lambda scout: term in scout.name.casefold())

    def _prepare(self, scout: Scout) -> Scout:
        return scout.model_copy(
            update={"contacts": tuple(scout.contacts), "groups": self._groups.require_all(scout.groups)}
        )

    def _resolve(self, stored: Scout) -> Scout:
        return stored.model_copy(update={"groups": self._groups.current(stored.groups)})

    def _detach_group(self, group_id: int) -> None:
        with self._lock:
            for scout_id, scout in list(self._rows.items()):
                if group_id in scout.group_ids:
                    remaining = frozenset(g for g in scout.groups if g.id != group_id)
                    self._rows[scout_id] = scout.model_copy(update={"groups": remaining})
