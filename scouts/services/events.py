"""Event management service, including group assignment."""

from __future__ import annotations

import logging
from typing import List, Optional

from scouts.db.repositories.base import EventStore, GroupStore
from scouts.db.schemas import Event, Group

logger = logging.getLogger(__name__)


class EventManagementService:
    """Manages events and which groups participate in them."""

    def __init__(self, events: EventStore, groups: GroupStore) -> None:
        self._events = events
        self._groups = groups

    def create_event(self, event: Event) -> Event:
        return self._events.create(event)

    def get_event(self, event_id: int) -> Optional[Event]:
        return self._events.find_by_id(event_id)

    def get_all_events(self) -> List[Event]:
        return self._events.find_all()

    def update_event(self, event: Event) -> Event:
        return self._events.update(event)

    def delete_event(self, event_id: int) -> None:
        self._events.delete(event_id)

    def assign_group_to_event(self, event_id: int, group_id: int) -> Event:
        """Add a group to the event's participating groups.

        Raises:
            ValueError: If the event or the group does not exist.
            OptimisticLockError: If the event changed between read and write.
        """
        event = self._require_event(event_id)
        group = self._require_group(group_id)
        groups = {g for g in event.participating_groups if g.id != group.id} | {group}
        updated = self._events.update(event.model_copy(update={"participating_groups": frozenset(groups)}))
        logger.info("Group %s assigned to event %s", group_id, event_id)
        return updated

    def remove_group_from_event(self, event_id: int, group_id: int) -> Event:
        """Remove a group from the event's participating groups.

        Raises:
            ValueError: If the event or the group does not exist.
            OptimisticLockError: If the event changed between read and write.
        """
        event = self._require_event(event_id)
        group = self._require_group(group_id)
        groups = frozenset(g for g in event.participating_groups if g.id != group.id)
        updated = self._events.update(event.model_copy(update={"participating_groups": groups}))
        logger.info("Group %s removed from event %s", group_id, event_id)
        return updated

    def get_events_for_group(self, group_id: int) -> List[Event]:
        """Return events the group is explicitly assigned to.

        Raises:
            ValueError: If the group does not exist.
        """
        self._require_group(group_id)
        return self._events.find_by_group_id(group_id)

    def _require_event(self, event_id: int) -> Event:
        event = self._events.find_by_id(event_id)
        if event is None:
            raise ValueError(f"Event with id {event_id} does not exist")
        return event

    def _require_group(self, group_id: int) -> Group:
        group = self._groups.find_by_id(group_id)
        if group is None:
            raise ValueError(f"Group with id {group_id} does not exist")
        return group
