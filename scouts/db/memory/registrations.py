"""In-memory registration store."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from scouts.db.errors import ConstraintViolationError
from scouts.db.memory.base import InMemoryStore
from scouts.db.memory.events import InMemoryEventStore
from scouts.db.memory.scouts import InMemoryScoutStore
from scouts.db.repositories.base import RegistrationStore
from scouts.db.schemas import Registration, as_utc

logger = logging.getLogger(__name__)


class InMemoryRegistrationStore(InMemoryStore[Registration], RegistrationStore):
    """Registrations embed the scout and event as they are stored when read.

    Deleting a scout or an event drops its registrations.
    """

    entity = "Registration"

    def __init__(
        self,
        scouts: InMemoryScoutStore,
        events: InMemoryEventStore,
        lock: Optional[threading.RLock] = None,
    ) -> None:
        super().__init__(lock)
        self._scouts = scouts
        self._events = events
        scouts.on_delete(self._drop_for_scout)
        events.on_delete(self._drop_for_event)

    def find_by_event_id(self, event_id: int) -> List[Registration]:
        return self._select(lambda registration: registration.event.id == event_id)

    def find_by_scout_id(self, scout_id: int) -> List[Registration]:
        return self._select(lambda registration: registration.scout.id == scout_id)

    def exists_by_event_and_scout(self, event_id: int, scout_id: int) -> bool:
        with self._lock:
            return any(
                r.event.id == event_id and r.scout.id == scout_id for r in self._rows.values()
            )

    def _prepare(self, registration: Registration) -> Registration:
        if not self._scouts.exists(registration.scout.id):
            logger.warning("Registration for missing scout %s rejected", registration.scout.id)
            raise ConstraintViolationError(f"Scout {registration.scout.id} does not exist")
        if not self._events.exists(registration.event.id):
            logger.warning("Registration for missing event %s rejected", registration.event.id)
            raise ConstraintViolationError(f"Event {registration.event.id} does not exist")
        return registration.model_copy(update={"registration_date": as_utc(registration.registration_date)})

    def _resolve(self, stored: Registration) -> Registration:
        return stored.model_copy(
            update={
                "scout": self._scouts.find_by_id(stored.scout.id),
                "event": self._events.find_by_id(stored.event.id),
            }
        )

    def _drop_for_scout(self, scout_id: int) -> None:
        self._drop(lambda registration: registration.scout.id == scout_id)

    def _drop_for_event(self, event_id: int) -> None:
        self._drop(lambda registration: registration.event.id == event_id)

    def _drop(self, predicate) -> None:
        with self._lock:
            for registration_id in [k for k, r in self._rows.items() if predicate(r)]:
                del self._rows[registration_id]
