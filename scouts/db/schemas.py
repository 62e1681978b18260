"""
Domain aggregates returned by every store.

Aggregates are immutable pydantic models. Callers derive a modified copy with
``model_copy(update=...)`` and hand the full aggregate back to ``update``.
"""
from datetime import date, datetime, timezone
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RegistrationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class _Aggregate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    version: int = 0


class Group(_Aggregate):
    """An organisational unit; names are for display and not unique."""

    name: str


class Contact(BaseModel):
    """A person reachable about a scout. Owned by exactly one scout."""

    model_config = ConfigDict(frozen=True)

    name: str
    phone_number: str
    email: str
    relationship: str


class Event(_Aggregate):
    name: str
    start_date: date
    end_date: date
    meeting_point: str = ""
    location: str
    cost: str = ""
    additional_info: str = ""
    # Empty means the event is open to all groups.
    participating_groups: FrozenSet[Group] = frozenset()

    @property
    def group_ids(self) -> FrozenSet[int]:
        return frozenset(g.id for g in self.participating_groups)


class Scout(_Aggregate):
    name: str
    birth_date: date
    address: str
    phone_number: str = ""
    health_insurance: str
    allergy_info: str = ""
    vaccination_info: str = ""
    last_updated: date
    contacts: Tuple[Contact, ...] = ()
    groups: FrozenSet[Group] = frozenset()

    @property
    def group_ids(self) -> FrozenSet[int]:
        return frozenset(g.id for g in self.groups)


class Registration(_Aggregate):
    """A scout's registration for an event.

    ``scout`` and ``event`` are resolved from their own stores on every read,
    so they always show the current state of those aggregates.
    """

    scout: Scout
    event: Event
    note: str = ""
    status: RegistrationStatus = RegistrationStatus.PENDING
    registration_date: datetime
    account_id: str

    @field_validator("registration_date")
    @classmethod
    def _normalise_registration_date(cls, v: datetime) -> datetime:
        return as_utc(v)
