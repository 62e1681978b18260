"""In-memory group store."""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable

from scouts.db.errors import ConstraintViolationError
from scouts.db.memory.base import InMemoryStore
from scouts.db.repositories.base import GroupStore
from scouts.db.schemas import Group

logger = logging.getLogger(__name__)


class InMemoryGroupStore(InMemoryStore[Group], GroupStore):
    entity = "Group"

    def require_all(self, groups: Iterable[Group]) -> FrozenSet[Group]:
        """Return the stored groups for ``groups``; every one must exist."""
        with self._lock:
            resolved = set()
            for group in groups:
                stored = self._rows.get(group.id)
                if stored is None:
                    logger.warning("Reference to missing group %s rejected", group.id)
                    raise ConstraintViolationError(f"Group {group.id} does not exist")
                resolved.add(stored)
            return frozenset(resolved)

    def current(self, groups: Iterable[Group]) -> FrozenSet[Group]:
        """Return the stored state of ``groups``, skipping any that no longer exist."""
        with self._lock:
            return frozenset(self._rows[g.id] for g in groups if g.id in self._rows)
