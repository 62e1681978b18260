"""
Backend selection.

:func:`create_stores` returns the four stores of one backend as a
:class:`Stores` bundle, so callers never depend on which backend is active.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from scouts.db import database
from scouts.db.memory import (
    InMemoryEventStore,
    InMemoryGroupStore,
    InMemoryRegistrationStore,
    InMemoryScoutStore,
)
from scouts.db.repositories import (
    EventStore,
    GroupStore,
    RegistrationStore,
    ScoutStore,
    SqlEventStore,
    SqlGroupStore,
    SqlRegistrationStore,
    SqlScoutStore,
)
from scouts.utils.runtime import StorageBackend, storage_backend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stores:
    groups: GroupStore
    events: EventStore
    scouts: ScoutStore
    registrations: RegistrationStore


@dataclass(frozen=True)
class InMemoryStores(Stores):
    def reset(self) -> None:
        """Clear every store and restart ids. Test harnesses only."""
        for store in (self.registrations, self.scouts, self.events, self.groups):
            store.reset()


def create_sql_stores(db: Session) -> Stores:
    scouts = SqlScoutStore(db)
    events = SqlEventStore(db)
    return Stores(
        groups=SqlGroupStore(db),
        events=events,
        scouts=scouts,
        registrations=SqlRegistrationStore(db, scouts=scouts, events=events),
    )


def create_memory_stores() -> InMemoryStores:
    lock = threading.RLock()
    groups = InMemoryGroupStore(lock=lock)
    events = InMemoryEventStore(groups, lock=lock)
    scouts = InMemoryScoutStore(groups, lock=lock)
    return InMemoryStores(
        groups=groups,
        events=events,
        scouts=scouts,
        registrations=InMemoryRegistrationStore(scouts, events, lock=lock),
    )


def create_stores(db: Optional[Session] = None, backend: Optional[StorageBackend] = None) -> Stores:
    """Build the stores of ``backend`` (default: SCOUTS_STORAGE_BACKEND).

    The relational backend uses ``db`` or a new session on the process-wide
    engine.
    """
    backend = backend or storage_backend()
    logger.info("Using %s storage backend", backend)
    if backend == "memory":
        return create_memory_stores()
    if db is None:
        db = database.make_session_factory(database.get_engine())()
    return create_sql_stores(db)
