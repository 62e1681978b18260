"""Store interfaces (repository pattern).

Every backend implements these contracts with identical semantics, so the
relational and in-memory stores are interchangeable.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from scouts.db.schemas import Event, Group, Registration, Scout

T = TypeVar("T")


class VersionedStore(ABC, Generic[T]):
    """CRUD with optimistic concurrency control on a ``version`` counter."""

    @abstractmethod
    def create(self, aggregate: T) -> T:
        """Persist a new aggregate and return it with its assigned id and version 0.

        Any id or version on the input is ignored.

        Raises:
            ConstraintViolationError: If the aggregate references a missing row.
        """
        ...

    @abstractmethod
    def update(self, aggregate: T) -> T:
        """Replace the stored aggregate and return it with the incremented version.

        Raises:
            NotFoundError: If no row exists for ``aggregate.id``.
            OptimisticLockError: If ``aggregate.version`` is not the stored version.
            ConstraintViolationError: If the aggregate references a missing row.
        """
        ...

    @abstractmethod
    def delete(self, aggregate_id: int) -> None:
        """Delete an aggregate with everything it owns. Unknown ids are ignored."""
        ...

    @abstractmethod
    def find_by_id(self, aggregate_id: int) -> Optional[T]:
        """Return the fully reconstructed aggregate, or None if not found."""
        ...

    @abstractmethod
    def find_all(self) -> List[T]:
        """Return all aggregates ordered by id ascending."""
        ...


class GroupStore(VersionedStore[Group]):
    """Interface for group persistence. Deleting a group detaches it everywhere."""


class EventStore(VersionedStore[Event]):
    """Interface for event persistence operations."""

    @abstractmethod
    def find_by_group_id(self, group_id: int) -> List[Event]:
        """Return events explicitly associated with the group, ordered by id.

        Events open to all groups (no associations) are not included.
        """
        ...


class ScoutStore(VersionedStore[Scout]):
    """Interface for scout persistence operations."""

    @abstractmethod
    def find_by_name(self, name: str) -> List[Scout]:
        """Return scouts whose name contains ``name``, ignoring case, ordered by id."""
        ...


class RegistrationStore(VersionedStore[Registration]):
    """Interface for registration persistence operations."""

    @abstractmethod
    def find_by_event_id(self, event_id: int) -> List[Registration]:
        """Return registrations for an event, ordered by id."""
        ...

    @abstractmethod
    def find_by_scout_id(self, scout_id: int) -> List[Registration]:
        """Return registrations of a scout, ordered by id."""
        ...

    @abstractmethod
    def exists_by_event_and_scout(self, event_id: int, scout_id: int) -> bool:
        """Check whether the scout is already registered for the event."""
        ...
