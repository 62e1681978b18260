"""
Registration repository (relational).

The registration query only recovers the registration row and the scout and
event ids. Scout and event are multi-table aggregates themselves, so they are
fetched through their own stores and embedded, which also means a read always
shows their current state.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import exists, select

from scouts.db import models
from scouts.db.repositories.base import EventStore, RegistrationStore, ScoutStore
from scouts.db.repositories.mapping import AggregatePlan, assemble
from scouts.db.repositories.sql import SqlStoreBase
from scouts.db.schemas import Registration, RegistrationStatus, as_utc

logger = logging.getLogger(__name__)

_registrations = models.Registration.__table__
_scouts = models.Scout.__table__
_events = models.Event.__table__


def _registration_fields(registration: Registration) -> Dict[str, Any]:
    return {
        "scout_id": registration.scout.id,
        "event_id": registration.event.id,
        "note": registration.note,
        "status": registration.status.value,
        "registration_date": as_utc(registration.registration_date),
        "account_id": registration.account_id,
    }


class SqlRegistrationStore(SqlStoreBase, RegistrationStore):
    entity = "Registration"
    table = _registrations

    def __init__(self, db, scouts: ScoutStore, events: EventStore) -> None:
        super().__init__(db)
        self._scouts = scouts
        self._events = events

    def create(self, registration: Registration) -> Registration:
        with self.transaction():
            registration_id = self.insert_row(_registration_fields(registration))
            created = self.find_by_id(registration_id)
        logger.debug(
            "Created registration %s (scout %s, event %s)",
            registration_id,
            registration.scout.id,
            registration.event.id,
        )
        return created

    def update(self, registration: Registration) -> Registration:
        with self.transaction():
            new_version = self.versioned_update(
                registration.id, registration.version, _registration_fields(registration)
            )
            updated = self.find_by_id(registration.id)
        logger.debug("Updated registration %s to version %s", registration.id, new_version)
        return updated

    def delete(self, registration_id: int) -> None:
        with self.transaction():
            self.delete_where(_registrations, "id", registration_id)
        logger.debug("Deleted registration %s", registration_id)

    def find_by_id(self, registration_id: int) -> Optional[Registration]:
        found = self._find(_registrations.c.id == registration_id)
        return found[0] if found else None

    def find_all(self) -> List[Registration]:
        return self._find()

    def find_by_event_id(self, event_id: int) -> List[Registration]:
        return self._find(_registrations.c.event_id == event_id)

    def find_by_scout_id(self, scout_id: int) -> List[Registration]:
        return self._find(_registrations.c.scout_id == scout_id)

    def exists_by_event_and_scout(self, event_id: int, scout_id: int) -> bool:
        stmt = select(
            exists().where(_registrations.c.event_id == event_id, _registrations.c.scout_id == scout_id)
        )
        return bool(self.db.execute(stmt).scalar())

    def _find(self, condition=None) -> List[Registration]:
        stmt = (
            select(_registrations)
            .select_from(
                _registrations.join(_scouts, _scouts.c.id == _registrations.c.scout_id)
                .join(_events, _events.c.id == _registrations.c.event_id)
            )
            .order_by(_registrations.c.id)
        )
        if condition is not None:
            stmt = stmt.where(condition)
        rows = self.db.execute(stmt).mappings().all()
        return assemble(rows, self._plan())

    def _plan(self) -> AggregatePlan:
        # Scouts and events are fetched once per query even when shared by many registrations.
        scouts: Dict[int, Any] = {}
        events: Dict[int, Any] = {}

        def build_root(row) -> Dict[str, Any]:
            scout_id, event_id = row["scout_id"], row["event_id"]
            if scout_id not in scouts:
                scouts[scout_id] = self._scouts.find_by_id(scout_id)
            if event_id not in events:
                events[event_id] = self._events.find_by_id(event_id)
            return {
                "id": row["id"],
                "version": row["version"],
                "scout": scouts[scout_id],
                "event": events[event_id],
                "note": row["note"],
                "status": RegistrationStatus(row["status"]),
                "registration_date": as_utc(row["registration_date"]),
                "account_id": row["account_id"],
            }

        return AggregatePlan(target=Registration, key_column="id", build_root=build_root)
