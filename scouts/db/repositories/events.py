"""
Event repository (relational).

Events are read with a LEFT JOIN over ``event_groups`` and ``groups`` and
folded back into aggregates by :mod:`scouts.db.repositories.mapping`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from scouts.db import models
from scouts.db.repositories import sync
from scouts.db.repositories.base import EventStore
from scouts.db.repositories.groups import group_from_row
from scouts.db.repositories.mapping import AggregatePlan, CollectionPlan, assemble
from scouts.db.repositories.sql import SqlStoreBase
from scouts.db.schemas import Event

logger = logging.getLogger(__name__)

_events = models.Event.__table__
_event_groups = models.EventGroup.__table__
_groups = models.Group.__table__


def _event_fields(event: Event) -> Dict[str, Any]:
    return {
        "name": event.name,
        "start_date": event.start_date,
        "end_date": event.end_date,
        "meeting_point": event.meeting_point,
        "location": event.location,
        "cost": event.cost,
        "additional_info": event.additional_info,
    }


def _event_root(row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "version": row["version"],
        "name": row["name"],
        "start_date": row["start_date"],
        "end_date": row["end_date"],
        "meeting_point": row["meeting_point"],
        "location": row["location"],
        "cost": row["cost"],
        "additional_info": row["additional_info"],
    }


EVENT_PLAN = AggregatePlan(
    target=Event,
    key_column="id",
    build_root=_event_root,
    collections=(
        CollectionPlan(
            attribute="participating_groups",
            key_column="group_id",
            build=lambda row: group_from_row(row, prefix="group_"),
        ),
    ),
)


def _joined_select():
    return (
        select(
            _events,
            _groups.c.id.label("group_id"),
            _groups.c.version.label("group_version"),
            _groups.c.name.label("group_name"),
        )
        .select_from(
            _events.outerjoin(_event_groups, _event_groups.c.event_id == _events.c.id)
            .outerjoin(_groups, _groups.c.id == _event_groups.c.group_id)
        )
        .order_by(_events.c.id)
    )


class SqlEventStore(SqlStoreBase, EventStore):
    entity = "Event"
    table = _events

    def create(self, event: Event) -> Event:
        with self.transaction() as db:
            event_id = self.insert_row(_event_fields(event))
            sync.sync_event_groups(db, event_id, event.participating_groups)
            created = self.find_by_id(event_id)
        logger.debug("Created event %s with %d groups", event_id, len(event.participating_groups))
        return created

    def update(self, event: Event) -> Event:
        with self.transaction() as db:
            new_version = self.versioned_update(event.id, event.version, _event_fields(event))
            sync.sync_event_groups(db, event.id, event.participating_groups)
            updated = self.find_by_id(event.id)
        logger.debug("Updated event %s to version %s", event.id, new_version)
        return updated

    def delete(self, event_id: int) -> None:
        with self.transaction():
            self.delete_where(models.Registration.__table__, "event_id", event_id)
            self.delete_where(_event_groups, "event_id", event_id)
            self.delete_where(_events, "id", event_id)
        logger.debug("Deleted event %s", event_id)

    def find_by_id(self, event_id: int) -> Optional[Event]:
        found = self._find(_events.c.id == event_id)
        return found[0] if found else None

    def find_all(self) -> List[Event]:
        return self._find()

    def find_by_group_id(self, group_id: int) -> List[Event]:
        # Filter parents by subquery so each event keeps its complete group set.
        linked = select(_event_groups.c.event_id).where(_event_groups.c.group_id == group_id)
        return self._find(_events.c.id.in_(linked))

    def _find(self, condition=None) -> List[Event]:
        stmt = _joined_select()
        if condition is not None:
            stmt = stmt.where(condition)
        return assemble(self.db.execute(stmt).mappings(), EVENT_PLAN)
