"""Registration management service."""

from __future__ import annotations

import logging
from typing import List

from scouts.db.repositories.base import EventStore, RegistrationStore, ScoutStore
from scouts.db.schemas import Registration

logger = logging.getLogger(__name__)


class RegistrationManagementService:
    """Registers scouts for events.

    A scout can be registered for an event once, and a registration never
    moves to another scout or event.
    """

    def __init__(self, registrations: RegistrationStore, scouts: ScoutStore, events: EventStore) -> None:
        self._registrations = registrations
        self._scouts = scouts
        self._events = events

    def create_registration(self, registration: Registration) -> Registration:
        scout_id = registration.scout.id
        event_id = registration.event.id
        self._verify_scout_exists(scout_id)
        self._verify_event_exists(event_id)
        if self._registrations.exists_by_event_and_scout(event_id, scout_id):
            raise ValueError("Scout is already registered for this event")
        created = self._registrations.create(registration)
        logger.info("Scout %s registered for event %s as registration %s", scout_id, event_id, created.id)
        return created

    def update_registration(self, registration: Registration) -> Registration:
        existing = self.get_registration(registration.id)
        if existing.scout.id != registration.scout.id:
            raise ValueError("Cannot change the scout of an existing registration")
        if existing.event.id != registration.event.id:
            raise ValueError("Cannot change the event of an existing registration")
        return self._registrations.update(registration)

    def delete_registration(self, registration_id: int) -> None:
        self.get_registration(registration_id)
        self._registrations.delete(registration_id)

    def get_registration(self, registration_id: int) -> Registration:
        registration = self._registrations.find_by_id(registration_id)
        if registration is None:
            raise ValueError(f"Registration with id {registration_id} does not exist")
        return registration

    def get_registrations_by_event(self, event_id: int) -> List[Registration]:
        self._verify_event_exists(event_id)
        return self._registrations.find_by_event_id(event_id)

    def get_registrations_by_scout(self, scout_id: int) -> List[Registration]:
        self._verify_scout_exists(scout_id)
        return self._registrations.find_by_scout_id(scout_id)

    def _verify_scout_exists(self, scout_id: int) -> None:
        if self._scouts.find_by_id(scout_id) is None:
            raise ValueError(f"Scout with id {scout_id} does not exist")

    def _verify_event_exists(self, event_id: int) -> None:
        if self._events.find_by_id(event_id) is None:
            raise ValueError(f"Event with id {event_id} does not exist")
